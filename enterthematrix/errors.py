class OperationFailedError(Exception):
    def __init__(self, reason):
        super().__init__(reason)
        self.msg = reason


class ListError(OperationFailedError):
    pass


class NoCandidatesError(OperationFailedError):
    def __init__(self):
        super().__init__(
            "Whoops - there are no running servers at the moment. "
            "Start one, and come back later."
        )


class SelectionInputError(OperationFailedError):
    pass


class ExecCreateError(OperationFailedError):
    pass


class ExecAttachError(OperationFailedError):
    pass


class TerminalModeError(OperationFailedError):
    pass


class TerminalQueryError(OperationFailedError):
    pass


class ResizeError(OperationFailedError):
    pass
