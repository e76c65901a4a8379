class ConfigurationError(Exception):
    """Raised when a required secret or credential is missing at request time."""

    def __init__(self, setting: str) -> None:
        self.setting = setting
        super().__init__(f"Missing required setting '{setting}'")
