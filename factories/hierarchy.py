"""Synthetic place / person / user fixtures for the CHT data store."""

import time
import uuid
from typing import Any, Dict, List, Optional

from faker import Faker
from pydantic import BaseModel

DEFAULT_PASSWORD = "Secret_1"
USER_ROLES = ["chw"]

fake = Faker()


class Hierarchy(BaseModel):
    places: List[Dict[str, Any]]
    persons: List[Dict[str, Any]]
    user: Optional[Dict[str, Any]] = None

    @property
    def health_center(self) -> Dict[str, Any]:
        return next(place for place in self.places if place["type"] == "health_center")

    @property
    def clinics(self) -> List[Dict[str, Any]]:
        return [place for place in self.places if place["type"] == "clinic"]

    @property
    def docs(self) -> List[Dict[str, Any]]:
        return self.places + self.persons


def seed(value: int) -> None:
    Faker.seed(value)


def _lineage(parent: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not parent:
        return None
    lineage: Dict[str, Any] = {"_id": parent["_id"]}
    if parent.get("parent"):
        lineage["parent"] = parent["parent"]
    return lineage


def _reported_date() -> int:
    return int(time.time() * 1000)


def build_place(name: str, place_type: str, parent: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    place = {
        "_id": str(uuid.uuid4()),
        "type": place_type,
        "name": name,
        "reported_date": _reported_date(),
    }
    lineage = _lineage(parent)
    if lineage:
        place["parent"] = lineage
    return place


def build_person(parent: Dict[str, Any], name: Optional[str] = None, **fields: Any) -> Dict[str, Any]:
    person = {
        "_id": str(uuid.uuid4()),
        "type": "person",
        "name": name or fake.name(),
        "phone": fake.numerify("+2547########"),
        "sex": fake.random_element(["male", "female"]),
        "date_of_birth": fake.date_of_birth(minimum_age=18, maximum_age=60).isoformat(),
        "reported_date": _reported_date(),
        "parent": _lineage(parent),
    }
    person.update(fields)
    return person


def build_user(username: str, place: Dict[str, Any], contact: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "username": username,
        "password": DEFAULT_PASSWORD,
        "place": place["_id"],
        "contact": {
            "_id": contact["_id"],
            "name": contact["name"],
            "phone": contact["phone"],
        },
        "roles": list(USER_ROLES),
        "known": True,
    }


def create_hierarchy(name: str, user: bool = False, nbr_clinics: int = 10, nbr_persons: int = 10) -> Hierarchy:
    """Generate a district hospital, one health center and `nbr_clinics` clinics.

    Each clinic holds `nbr_persons` persons plus a primary contact. With
    `user=True` an offline CHW user is attached to the health center.
    """
    district_hospital = build_place(f"{name} district hospital", "district_hospital")
    health_center = build_place(f"{name} health center", "health_center", district_hospital)
    places = [district_hospital, health_center]
    persons: List[Dict[str, Any]] = []

    for index in range(1, nbr_clinics + 1):
        clinic = build_place(f"{name} clinic {index}", "clinic", health_center)
        contact = build_person(clinic)
        clinic["contact"] = {"_id": contact["_id"], "parent": contact["parent"]}
        places.append(clinic)
        persons.append(contact)
        persons.extend(build_person(clinic) for _ in range(nbr_persons))

    user_doc = None
    if user:
        chw_contact = build_person(health_center)
        user_doc = build_user(f"{name}_user".replace(" ", "_").lower(), health_center, chw_contact)

    return Hierarchy(places=places, persons=persons, user=user_doc)
