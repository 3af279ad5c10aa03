"""Fixtures shared by the example suites."""


class Cart:
    def __init__(self) -> None:
        self.items = []

    def add(self, item: str, quantity: int = 1) -> int:
        self.items.append({"item": item, "quantity": quantity})
        return len(self.items)

    def clear(self) -> None:
        self.items.clear()

    def total_quantity(self) -> int:
        return sum(entry["quantity"] for entry in self.items)


FIXTURES = {
    "cart": Cart(),
    "prices": {"apple": 0.5, "pear": 0.75},
}
