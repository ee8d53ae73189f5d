from enum import Enum


class Strand(str, Enum):
    forward = "+"
    reverse = "-"
