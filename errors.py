class RemoteUnavailableError(RuntimeError):
    """A collaborator API could not be reached or returned an unusable answer."""

    def __init__(self, service: str, detail: str):
        super().__init__(f"{service} unavailable: {detail}")
        self.service = service
        self.detail = detail
