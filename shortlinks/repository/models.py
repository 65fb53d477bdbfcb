"""Data models for the shortlinks core."""

from dataclasses import dataclass


@dataclass
class Shortlink:
    """Represents a shortened URL owned by a caller."""

    uid: str
    owner_id: str
    short: str
    long: str
    deleted: bool = False
    correlation_id: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary (snapshot record layout)."""
        return {
            "uid": self.uid,
            "owner_id": self.owner_id,
            "short": self.short,
            "long": self.long,
            "deleted": self.deleted,
            "correlation_id": self.correlation_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Shortlink":
        """Create from dictionary."""
        return cls(
            uid=data["uid"],
            owner_id=data["owner_id"],
            short=data["short"],
            long=data["long"],
            deleted=bool(data.get("deleted", False)),
            correlation_id=data.get("correlation_id") or "",
        )


@dataclass
class BatchLink:
    """One entry of a batch shortening request."""

    url: str
    correlation_id: str = ""
