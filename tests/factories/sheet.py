from polyfactory import Use
from polyfactory.factories.pydantic_factory import ModelFactory

from sheetshare.models.field import DisplayFormat, FieldType, SheetFieldCreate
from sheetshare.models.sheet import SheetCreate


class SheetCreateFactory(ModelFactory[SheetCreate]):
    """Factory for SheetCreate schema."""

    __model__ = SheetCreate

    sheet_number = Use(ModelFactory.__random__.randint, 1, 1_000_000)
    sheet_name = Use(lambda: f"Sheet {ModelFactory.__random__.randint(1, 1_000_000)}")


class SheetFieldCreateFactory(ModelFactory[SheetFieldCreate]):
    """Factory for SheetFieldCreate schema."""

    __model__ = SheetFieldCreate

    title = Use(lambda: f"Column {ModelFactory.__random__.randint(1, 10_000)}")
    type = FieldType.DYNAMIC
    display_format = DisplayFormat.TEXT
    display_width = "150"
