# topmark:header:start
#
#   project      : MQLSpec
#   file         : __init__.py
#   file_relpath : src/mqlspec/cli_shared/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Framework-agnostic helpers shared by the CLI."""
