# topmark:header:start
#
#   file         : exit_codes.py
#   file_relpath : src/mqlspec/core/exit_codes.py
#   project      : MQLSpec
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the MQLSpec CLI.

MQLSpec aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently. A corpus with validation failures
exits with the generic ``FAILURE`` code.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the MQLSpec CLI.

    Attributes:
        SUCCESS: Every discovered definition document is valid.
        FAILURE: At least one validation failure was recorded.
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        FILE_NOT_FOUND: The definitions root does not exist. Mirrors BSD
            ``EX_NOINPUT (66)``.
        SOFTWARE_ERROR: Internal failure (e.g. a bundled meta-schema cannot be
            loaded). Mirrors BSD ``EX_SOFTWARE (70)``.
        CONFIG_ERROR: Configuration error. Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    SOFTWARE_ERROR = 70  # EX_SOFTWARE
    CONFIG_ERROR = 78  # EX_CONFIG
