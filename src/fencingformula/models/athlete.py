"""Athlete data supplied to the formula engine."""

# Fencing Formula
# Copyright (C) 2025  Fencing Formula developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from fencingformula.models.enums import Weapon, coerce_enum


@dataclass(frozen=True)
class ClubRef:
    """Snapshot of the athlete's primary club."""

    id: str
    name: str
    country: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "country": self.country}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClubRef":
        return cls(id=data["id"], name=data["name"], country=data.get("country"))


@dataclass(frozen=True)
class AthleteRanking:
    """Initial ranking used for seeding (lower rank is stronger)."""

    rank: int
    points: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"rank": self.rank, "points": self.points}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AthleteRanking":
        return cls(rank=int(data["rank"]), points=float(data.get("points", 0.0)))


@dataclass(frozen=True)
class AthleteData:
    """An athlete as the engine sees it.

    Supplied fresh for each generation call; the engine never mutates it.

    Attributes:
        id: Unique athlete identifier
        name: Display name
        nationality: Country code used for country separation
        club: Primary club, used for club separation
        ranking: Initial ranking, used for seeding when no previous results exist
        weapon: Weapon the athlete is registered for
        date_of_birth: Used for age-category eligibility checks
    """

    id: str
    name: str
    nationality: Optional[str] = None
    club: Optional[ClubRef] = None
    ranking: Optional[AthleteRanking] = None
    weapon: Optional[Weapon] = None
    date_of_birth: Optional[date] = None

    @property
    def club_name(self) -> Optional[str]:
        """Name of the athlete's club, if any."""
        return self.club.name if self.club else None

    def age_on(self, reference: date) -> Optional[int]:
        """Age in whole years on the given date, or None without a birth date."""
        if self.date_of_birth is None:
            return None
        return relativedelta(reference, self.date_of_birth).years

    def to_dict(self) -> Dict[str, Any]:
        """Serialize athlete to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "nationality": self.nationality,
            "club": self.club.to_dict() if self.club else None,
            "ranking": self.ranking.to_dict() if self.ranking else None,
            "weapon": self.weapon.value if self.weapon else None,
            "date_of_birth": (
                self.date_of_birth.isoformat() if self.date_of_birth else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AthleteData":
        """Deserialize athlete from dictionary.

        ``name`` falls back to ``first_name`` and ``last_name`` when absent.
        """
        name = data.get("name")
        if not name:
            name = " ".join(
                part for part in (data.get("first_name"), data.get("last_name")) if part
            )

        dob = data.get("date_of_birth")
        if isinstance(dob, str):
            dob = isoparse(dob).date()

        return cls(
            id=data["id"],
            name=name,
            nationality=data.get("nationality"),
            club=ClubRef.from_dict(data["club"]) if data.get("club") else None,
            ranking=(
                AthleteRanking.from_dict(data["ranking"])
                if data.get("ranking")
                else None
            ),
            weapon=coerce_enum(Weapon, data.get("weapon")),
            date_of_birth=dob,
        )
