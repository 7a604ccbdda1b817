class NullArgumentError(ValueError):
    pass


class IllegalArgumentError(ValueError):
    pass


class IllegalStateError(RuntimeError):
    pass
