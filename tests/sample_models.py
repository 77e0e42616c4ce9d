"""Dataclasses shared by the test suite (also importable as CLI targets)."""

from __future__ import annotations

import queue
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, NewType, Optional

from tsgen import ts_field


class Color(Enum):
    RED = 1
    GREEN = 2

    def ts_name(self) -> str:
        return self.name.title()


class Plain(Enum):
    A = "a"


class Weekday(int):
    pass


@dataclass(frozen=True)
class WeekdayEntry:
    value: Weekday
    ts_name: str


class Level(str):
    def ts_name(self) -> str:
        return self.upper()


@dataclass
class Profile:
    name: str
    age: int = ts_field(omitempty=True, default=0)
    tags: List[str] = field(default_factory=list)


@dataclass
class Address:
    city: str
    number: int
    country: Optional[str] = ts_field("country", omitempty=True, default=None)


@dataclass
class PersonalInfo:
    hobbies: List[str] = ts_field("hobby", default_factory=list)
    pet_name: str = ""


@dataclass
class Person:
    name: str
    personal_info: PersonalInfo
    nicknames: List[str]
    addresses: List[Address]
    address: Optional[Address]
    metadata: Dict[str, str]
    friends: List[Person]
    password: str = ts_field("-", default="")


@dataclass
class Team:
    lead: Address
    offices: List[Optional[Address]]
    by_city: Dict[str, Address]


@dataclass
class Grid:
    matrix: List[List[int]]
    labels: Optional[List[List[str]]] = None


@dataclass
class Palette:
    primary: Color
    accents: List[Color]
    fallback: Optional[Color] = None


@dataclass
class Timestamps:
    created: str
    updated: str


@dataclass
class Document:
    stamps: Timestamps = ts_field(embed=True)
    title: str = ""


@dataclass
class Event:
    name: str
    at: datetime = ts_field(ts_type="Date", ts_transform="new Date(__VALUE__)", default=None)


@dataclass
class Meeting:
    topic: str
    starts: datetime
    ends: Optional[datetime] = None


@dataclass
class Job:
    name: str
    callback: Callable[[int], int]


@dataclass
class Worker:
    inbox: queue.Queue


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Heatmap:
    cells: Dict[Point, float]


@dataclass
class Settings:
    values: Dict[str, Any]
    flags: Dict[str, bool]
    nested: Dict[str, List[Address]]


@dataclass
class Secret:
    token: str = ts_field("-", default="")


@dataclass
class Leaf:
    value: int


@dataclass
class Middle:
    leaf: Leaf


@dataclass
class Outer:
    leaf: Leaf
    middle: Middle
    leaves: List[Leaf]


UserId = NewType("UserId", int)


@dataclass
class Account:
    id: UserId
    owners: List[UserId]
    parent: Optional[UserId] = None


@dataclass
class Swatch:
    primary: Color = ts_field("primary", ts_type="string")
    secondary: Color = ts_field(ts_transform="String(__VALUE__)", default=Color.GREEN)


@dataclass
class Branch:
    middle: Middle
    leaf: Optional[Leaf] = None
