""" Custom error class from imagehack """

class ConfigError(Exception):
    def __init__(self, message, option):
        super().__init__(message)
        self.message = message
        self.option = option
