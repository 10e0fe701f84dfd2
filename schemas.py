"""
Document Schemas for the Drug Tracker

The whole store is one JSON array of Person objects; each person carries the
drugs they take during the day. Field aliases match the stored JSON names.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List


class Drug(BaseModel):
    """A daily reminder belonging to one person."""
    name: str = Field(..., description="Drug name, unique within a person in practice")
    time: str = Field(..., description="Daily reminder time in HH:MM 24h format")
    comment: str = Field("", description="Free text shown with the reminder")
    status: bool = Field(False, description="Whether the drug was taken today")


class Person(BaseModel):
    """A person and their ordered list of drugs."""
    model_config = ConfigDict(populate_by_name=True)

    person_name: str = Field(..., alias="personName", description="Person name, unique in a document")
    drugs: List[Drug] = Field(default_factory=list, description="Drugs in schedule order")

    @field_validator("drugs", mode="before")
    @classmethod
    def null_drugs_as_empty(cls, value):
        # older stores hold "drugs": null for people without drugs
        return [] if value is None else value


Document = List[Person]


def dump_document(people: Document) -> list:
    """Return the JSON-ready form of a document using the stored field names."""
    return [person.model_dump(by_alias=True) for person in people]


def find_duplicate_names(people: Document) -> List[str]:
    seen = set()
    duplicates = []
    for person in people:
        if person.person_name in seen and person.person_name not in duplicates:
            duplicates.append(person.person_name)
        seen.add(person.person_name)
    return duplicates
