# topmark:header:start
#
#   project      : MQLSpec
#   file         : __init__.py
#   file_relpath : src/mqlspec/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MQLSpec CLI commands."""
