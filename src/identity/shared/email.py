"""EmailAddress value object for validated account email addresses."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity

_LOCAL_PART = re.compile(r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~.-]+$")
_DOMAIN_LABEL = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")


@identity.value_object
class EmailAddress:
    """An email address with one @, a dotted domain, and no empty or padded parts.

    Users store the normalised (lower-cased) address as a plain string so that
    it can be looked up; this value object is the validation gate in front of it.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address
        local_part, at, domain_part = email.partition("@")

        valid = (
            at == "@"
            and "@" not in domain_part
            and bool(_LOCAL_PART.match(local_part))
            and not local_part.startswith(".")
            and not local_part.endswith(".")
            and ".." not in local_part
            and "." in domain_part
            and all(_DOMAIN_LABEL.match(label) for label in domain_part.split("."))
        )
        if not valid:
            raise ValidationError({"email": ["Please enter a valid email"]})

    @classmethod
    def normalise(cls, email: str) -> str:
        """Validate `email` and return it trimmed and lower-cased."""
        return cls(address=(email or "").strip().lower()).address
