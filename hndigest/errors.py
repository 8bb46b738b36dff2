from typing import Optional


class DigestError(RuntimeError):
    """Base error for a digest run that must abort."""


class ConfigError(DigestError):
    pass


class FetchError(DigestError):
    pass


class WebhookError(DigestError):
    def __init__(self, status_code: Optional[int], body: str = ""):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            msg = f"failed to send webhook: {body}"
        else:
            msg = f"webhook returned status {status_code}: {body}"
        super().__init__(msg)
