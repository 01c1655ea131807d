class CheckoutError(Exception):
    """Terminal failure of one submission attempt. `message` is shown to the user."""
    kind = "checkout_error"
    default_message = "提交訂單時發生未知錯誤。"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ProcessingTimeout(CheckoutError):
    kind = "processing_timeout"
    default_message = "處理訂單時發生超時"


class ProcessingFailure(CheckoutError):
    kind = "processing_failure"
    default_message = "處理訂單時發生錯誤"


class PersistenceTimeout(CheckoutError):
    kind = "persistence_timeout"
    default_message = "儲存訂單時發生超時"


class PersistenceRejected(CheckoutError):
    kind = "persistence_rejected"
    default_message = "無法將訂單儲存至後端系統。"

    def __init__(self, reason: str | None = None):
        self.reason = reason or self.default_message
        super().__init__(self.reason)


class UnknownFailure(CheckoutError):
    kind = "unknown_failure"


class EmptyCartError(CheckoutError):
    kind = "empty_cart"
    default_message = "購物車是空的。"


class SubmissionInProgress(CheckoutError):
    kind = "submission_in_progress"
    default_message = "訂單正在處理中，請稍候。"
