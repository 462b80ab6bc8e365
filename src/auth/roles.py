"""User roles and the dashboard each role lands on after login."""
import enum


class Role(enum.Enum):
    ADMIN = "ADMIN"
    PARTICIPANT = "PARTICIPANT"

    @classmethod
    def parse(cls, value: str) -> "Role":
        """
        Parse a role from form input or a stored authority string.

        Accepts the bare name ("ADMIN") or the prefixed authority
        ("ROLE_ADMIN"), case-insensitively.

        Raises:
            ValueError: if the value names no known role
        """
        name = (value or "").strip().upper()
        if name.startswith("ROLE_"):
            name = name[len("ROLE_"):]
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown role: {value!r}") from None

    @property
    def authority(self) -> str:
        return f"ROLE_{self.value}"

    @property
    def dashboard_endpoint(self) -> str:
        return _DASHBOARD_ENDPOINTS[self]


_DASHBOARD_ENDPOINTS = {
    Role.ADMIN: "admin.dashboard",
    Role.PARTICIPANT: "participant.dashboard",
}
