"""Constants for the oktaflow CLI."""

PASSWORD_PROMPT = "Password"
PASSCODE_PROMPT = "Passcode for {factor_type}"
USERNAME_PROMPT = "Username"

LOG_FORMAT = "%(message)s"
