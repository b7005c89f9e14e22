from typing import NamedTuple


class CategoryDetails(NamedTuple):
    color: str
    icon: str


CATEGORIES = (
    "Food",
    "Transport",
    "Housing",
    "Utilities",
    "Entertainment",
    "Health",
    "Shopping",
    "Other",
)

DEFAULT_CATEGORY = "Other"

_DETAILS = {
    "Food": CategoryDetails("#10B981", "utensils"),
    "Transport": CategoryDetails("#8B5CF6", "car"),
    "Housing": CategoryDetails("#06B6D4", "home"),
    "Utilities": CategoryDetails("#3B82F6", "zap"),
    "Entertainment": CategoryDetails("#F59E0B", "film"),
    "Health": CategoryDetails("#F43F5E", "heart-pulse"),
    "Shopping": CategoryDetails("#EC4899", "shopping-bag"),
    "Other": CategoryDetails("#94A3B8", "layers"),
}


def category_details(name: str) -> CategoryDetails:
    # unknown categories are drawn like "Other"
    return _DETAILS.get(name, _DETAILS[DEFAULT_CATEGORY])
