# engine/exceptions.py

class EngineError(Exception):
    pass


class InvalidSeries(EngineError):
    pass
