from typing import Literal

BinName = Literal["yellow", "purple", "black"]

YELLOW = "yellow"  # recyclables
PURPLE = "purple"  # coffee cups
BLACK = "black"    # general waste

BIN_DESCRIPTIONS: dict[str, str] = {
    YELLOW: "Recyclables (bottles, cans, cardboard)",
    PURPLE: "Coffee and mugs",
    BLACK: "General waste (food scraps, tissues)",
}

# Sample objects per bin, used by the mock classifier and the fake server
SAMPLE_OBJECTS: dict[str, list[str]] = {
    YELLOW: ["plastic bottle", "aluminium can", "cardboard box"],
    PURPLE: ["coffee cup", "mug"],
    BLACK: ["food scraps", "tissue"],
}


def describe(bin_name: str) -> str:
    return BIN_DESCRIPTIONS.get(bin_name.strip().lower(), "")
