# app/record_store/errors.py


class RecordStoreError(Exception):
    """Record Store unreachable or returned an unexpected status."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class RecordNotFoundError(RecordStoreError):
    """Requested id is absent from the Record Store."""

    def __init__(self, resource: str, record_id: str):
        super().__init__(f"{resource}/{record_id} not found", status_code=404)
        self.resource = resource
        self.record_id = record_id
