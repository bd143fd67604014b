from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CatalogModel(BaseModel):
    """Base for catalog payloads: upstream PascalCase keys, unknown keys dropped."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ProductSize(CatalogModel):
    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    weight: str = Field(alias="Weight")
    plus_size_fee: float = Field(alias="PlusSize_Fee")


class Color(CatalogModel):
    id: int = Field(alias="Id")
    name: str = Field(alias="Name")


class ServiceColor(CatalogModel):
    hex_color_code: str = Field(alias="HexColorCode")
    pantone_color_code: str = Field(alias="PantoneColorCode")
    embroidery_color_code: str = Field(alias="EmbroideryColorCode")
    rbg: str = Field(alias="RBG")


class Service(CatalogModel):
    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    alt_name: Optional[str] = Field(default=None, alias="Alt_Name")
    available_colors: Optional[List[ServiceColor]] = Field(default=None, alias="AvailableColors")


class SavedDesign(CatalogModel):
    id: int = Field(alias="Id")
    product_id: int = Field(alias="ProductId")


class Placement(CatalogModel):
    id: int = Field(alias="Id")
    name: str = Field(alias="Name")


class Subscription(CatalogModel):
    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    image_path: str = Field(alias="ImagePath")
    type: str = Field(alias="Type")
    remain_inventory: int = Field(alias="RemainInventory")
    saved_design: SavedDesign = Field(alias="SavedDesign")
    placements: List[Placement] = Field(alias="Placements")


class Location(CatalogModel):
    id: int = Field(alias="Id")
    name: str = Field(alias="Name")


class Product(CatalogModel):
    """A catalog product. Identity is ``id`` (upstream ``Id``)."""

    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    code: str = Field(alias="Code")
    sku: str = Field(alias="SKU")
    sizes: List[ProductSize] = Field(alias="Sizes")
    features: Optional[str] = Field(default=None, alias="Features")
    benefits: Optional[str] = Field(default=None, alias="Benefits")
    colors: Optional[List[Color]] = Field(default=None, alias="Colors")
    services: Optional[List[Service]] = Field(default=None, alias="Services")
    price: Optional[float] = Field(default=None, alias="Price")
    currency_code: Optional[str] = Field(default=None, alias="Currency_Code")
    subscriptions: Optional[List[Subscription]] = Field(default=None, alias="Subscriptions")
    locations: Optional[List[Location]] = Field(default=None, alias="Locations")
    detail_name: Optional[str] = Field(default=None, alias="DetailName")
    description: Optional[str] = Field(default=None, alias="Description")
