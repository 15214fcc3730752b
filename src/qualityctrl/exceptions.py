class UnknownTierError(ValueError):
    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"Unknown quality tier: {name!r}")


class InvalidPolicyError(ValueError):
    """Raised when a transition policy has no hysteresis band."""
    pass
