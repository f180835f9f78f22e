"""
Exceptions for configuration errors.
"""


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""

    def __init__(self, key: str, value: object, reason: str = ""):
        self.key = key
        self.value = value
        self.message = f"Invalid config value {key}={value!r}" + (f": {reason}" if reason else "")
        super().__init__(self.message)
