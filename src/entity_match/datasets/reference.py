from __future__ import annotations

import random
from dataclasses import dataclass, field

from entity_match.datasets.profiles import SUPPLIER_COLUMNS

_PREFIXES = ["Tech", "Global", "Andina", "Norte", "Delta", "Prime", "Austral", "Nova"]
_CORES = ["Distributor", "Supplies", "Importadora", "Logistics", "Components", "Electronics"]
_SUFFIXES = ["SA", "SRL", "SAS", "Ltd", "Inc"]
_DOMAINS = ["com", "com.ar", "net", "io"]
_STATUSES = ["active", "active", "active", "inactive"]


@dataclass
class ReferenceDataset:
    rows: list[dict[str, str]]
    duplicate_of: dict[str, str] = field(default_factory=dict)


class ReferenceDatasetGenerator:
    """Generate synthetic supplier rows (with intentional dupes) for tests and benchmarks."""

    def __init__(self, seed: int = 7) -> None:
        self._rng = random.Random(seed)

    def generate(self, size: int, duplicate_rate: float = 0.15) -> ReferenceDataset:
        if size <= 0:
            return ReferenceDataset(rows=[])

        unique_count = int(size * (1.0 - duplicate_rate))
        unique_count = max(1, min(unique_count, size))

        rows = [self._profile(i) for i in range(unique_count)]
        duplicate_of: dict[str, str] = {}
        while len(rows) < size:
            source = self._rng.choice(rows[:unique_count])
            row = dict(source)
            row["id"] = f"sup_{len(rows):06d}"
            self._perturb(row)
            duplicate_of[row["id"]] = source["id"]
            rows.append(row)

        self._rng.shuffle(rows)
        return ReferenceDataset(rows=rows, duplicate_of=duplicate_of)

    def _profile(self, idx: int) -> dict[str, str]:
        prefix = self._rng.choice(_PREFIXES)
        core = self._rng.choice(_CORES)
        suffix = self._rng.choice(_SUFFIXES)
        slug = f"{prefix}{core}{idx}".lower()
        values = {
            "id": f"sup_{idx:06d}",
            "name": f"{prefix} {core} {idx} {suffix}",
            "contact_person": f"Contact {idx}",
            "email": f"ventas@{slug}.{self._rng.choice(_DOMAINS)}",
            "phone": f"+54 11 {4000 + idx % 6000:04d}-{idx % 10000:04d}",
            "website": f"https://www.{slug}.com",
            "address": f"Calle {idx % 300} #{idx % 97}",
            "tax_id": f"30-{idx:08d}-{idx % 10}",
            "status": self._rng.choice(_STATUSES),
        }
        return {column: values[column] for column in SUPPLIER_COLUMNS}

    def _perturb(self, row: dict[str, str]) -> None:
        mutation = self._rng.choice(["name", "contact", "mixed"])

        if mutation in {"name", "mixed"}:
            row["name"] = self._name_variant(row["name"])
        if mutation in {"contact", "mixed"}:
            row["email"] = self._email_variant(row["email"])
            row["phone"] = self._phone_variant(row["phone"])
        row["website"] = self._website_variant(row["website"])

    def _name_variant(self, name: str) -> str:
        variant = self._rng.choice(["join", "case", "typo"])
        if variant == "join" and " " in name:
            at = name.index(" ")
            return name[:at] + name[at + 1 :]
        if variant == "case":
            return name.upper()
        position = self._rng.randrange(len(name))
        return name[:position] + name[position + 1 :]

    def _email_variant(self, email: str) -> str:
        return self._rng.choice([email.upper(), email.capitalize(), f"  {email}"])

    def _phone_variant(self, phone: str) -> str:
        digits = "".join(ch for ch in phone if ch.isdigit())
        return self._rng.choice([digits, f"({digits[:2]}) {digits[2:]}", phone.replace(" ", ".")])

    def _website_variant(self, website: str) -> str:
        bare = website.removeprefix("https://www.")
        return self._rng.choice([f"http://{bare}/", f"http://www.{bare}", bare.upper(), website])
