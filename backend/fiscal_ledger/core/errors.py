class LedgerError(Exception):
    code = "ledger_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code


class InvalidAmount(LedgerError):
    code = "invalid_amount"


class InvalidDate(LedgerError):
    code = "invalid_date"


class Unauthorized(LedgerError):
    code = "admin_only"


class StorageFailure(LedgerError):
    code = "storage_failure"
