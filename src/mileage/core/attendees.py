"""Attendee normalization - derives identity from raw participant records."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RawAttendee:
    """A participant as reported by the calendar API."""

    email: str = ""
    display_name: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "RawAttendee":
        return cls(
            email=data.get("email") or "",
            display_name=data.get("displayName") or None,
        )


@dataclass(frozen=True)
class Attendee:
    """A normalized event attendee.

    Name fields are None when the calendar gave no display name; company is
    None when it cannot be derived from the email.
    """

    email: str
    full_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None

    @property
    def label(self) -> str:
        """Display name, falling back to email."""
        return self.full_name or self.email


@dataclass(frozen=True)
class Organizer:
    """The event organizer."""

    email: str | None = None
    company: str | None = None


def company_from_email(email: str | None) -> str | None:
    """
    Infer a company name from an email domain.

    "jane@acme.co.uk" -> "acme". Returns None for anything malformed.
    """
    if not email:
        return None
    parts = email.split("@")
    if len(parts) < 2:
        return None
    company = parts[1].split(".")[0]
    return company or None


def normalize_attendee(raw: RawAttendee) -> Attendee:
    """Split the display name and infer the company."""
    company = company_from_email(raw.email)
    if not raw.display_name:
        return Attendee(email=raw.email, company=company)

    first, *rest = raw.display_name.split(" ")
    return Attendee(
        email=raw.email,
        full_name=raw.display_name,
        first_name=first,
        last_name=" ".join(rest),
        company=company,
    )


def normalize_attendees(raws: list[RawAttendee] | None) -> list[Attendee]:
    """Normalize a possibly-missing attendee list."""
    return [normalize_attendee(raw) for raw in raws or []]


def normalize_organizer(email: str | None) -> Organizer:
    return Organizer(email=email, company=company_from_email(email))
