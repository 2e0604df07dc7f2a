from pydantic import BaseModel


class LineItem(BaseModel):
    variant_id: str
    quantity: int = 1
    properties: dict[str, str] = {}

    def to_payload(self) -> dict:
        variant_id: int | str = int(self.variant_id) if self.variant_id.isdigit() else self.variant_id
        return {
            "variant_id": variant_id,
            "quantity": self.quantity,
            "properties": [{"name": k, "value": v} for k, v in self.properties.items()],
        }


class VariantInput(BaseModel):
    title: str
    sku: str
    price: str
    requires_shipping: bool = True
    taxable: bool = True

    def to_payload(self) -> dict:
        return {
            "option1": self.title,
            "sku": self.sku,
            "price": self.price,
            "inventory_management": None,
            "requires_shipping": self.requires_shipping,
            "taxable": self.taxable,
        }
