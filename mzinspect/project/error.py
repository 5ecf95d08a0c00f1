class MZInspectConfigException(Exception):
    pass


class InvalidMZInspectConfigException(MZInspectConfigException):
    pass
