from typing import Final

# Settings file name, stored in the user's home directory
SETTINGS_FILE_NAME: Final = ".gobeat"

# Environment variable overriding the settings file location
SETTINGS_PATH_ENV: Final = "GOBEAT_SETTINGS"

# Game reported when none is configured
DEFAULT_GAME: Final = "ping pong"

# Status codes accepted from the result server
SUCCESS_STATUS_CODES: Final = frozenset({200, 201})
