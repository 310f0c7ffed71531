class CaseStoreError(Exception):
    """
    Raised when the hosted backend (tables, storage or auth) rejects an operation.

    The message is the backend's own error text so it can be shown to the user.
    """

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.message = message
        self.operation = operation
