"""
Shared test infrastructure.

Modules:
- rule_utils: running the rule and classifying comments
- file_utils: writing files in temporary projects
- cli_utils: running the command line in a subprocess
"""
