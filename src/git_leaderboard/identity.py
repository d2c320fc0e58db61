from __future__ import annotations

import dataclasses
from typing import Iterable


def normalize_email(email: str) -> str:
    return email.strip()


def normalize_name(name: str) -> str:
    return " ".join(name.split())


@dataclasses.dataclass(frozen=True)
class AuthorIdentity:
    email: str  # key, exact match
    name: str  # canonical display name

    @property
    def label(self) -> str:
        return self.name or self.email


def resolve_identities(
    records: Iterable[tuple[str, str]],
) -> tuple[list[AuthorIdentity], dict[str, int], list[str]]:
    """
    Collapse raw (display_name, email) commit records into one identity per email.

    Emails compare exactly (case-sensitive). The canonical display name is the
    first one seen in history order, so variants in case or whitespace of the
    same author's name all map onto the first spelling. Records without an
    email are dropped with a warning.

    Returns (identities in first-seen order, email -> commit count, warnings).
    """
    names: dict[str, str] = {}
    counts: dict[str, int] = {}
    warnings: list[str] = []

    for i, (raw_name, raw_email) in enumerate(records, start=1):
        email = normalize_email(raw_email or "")
        name = normalize_name(raw_name or "")
        if not email:
            warnings.append(f"dropped commit record #{i} with no author email (name={name or 'unknown'!r})")
            continue
        if email not in names:
            names[email] = name
            counts[email] = 0
        elif not names[email] and name:
            names[email] = name
        counts[email] += 1

    identities = [AuthorIdentity(email=email, name=name) for email, name in names.items()]
    return identities, counts, warnings
