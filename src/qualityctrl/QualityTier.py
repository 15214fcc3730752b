from enum import Enum

from qualityctrl.exceptions import UnknownTierError


class QualityTier(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, QualityTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, QualityTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, QualityTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, QualityTier):
            return NotImplemented
        return self.rank >= other.rank

    def lower(self) -> 'QualityTier':
        """One tier down, or the same tier if already the lowest."""
        return _ORDER[max(self.rank - 1, 0)]

    def higher(self) -> 'QualityTier':
        """One tier up, or the same tier if already the highest."""
        return _ORDER[min(self.rank + 1, len(_ORDER) - 1)]

    @classmethod
    def parse(cls, value: 'QualityTier | str') -> 'QualityTier':
        if isinstance(value, QualityTier):
            return value

        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass

        raise UnknownTierError(value)


_ORDER = (QualityTier.LOW, QualityTier.MEDIUM, QualityTier.HIGH)
