import pytest
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCode, ErrCodeError
from sheetshare.core.cells import CellService
from sheetshare.core.sheets import FieldService, SheetService, ShareService
from sheetshare.models.cell import Cell
from sheetshare.models.field import FieldType, SheetField
from sheetshare.models.principal import Principal, Role
from sheetshare.models.share import ShareGrant, ShareGrantCreate
from sheetshare.models.sheet import Sheet
from sheetshare.models.user import User
from tests.factories.cell import CellWriteFactory
from tests.factories.sheet import SheetCreateFactory, SheetFieldCreateFactory

ADMIN = Principal(id=1, role=Role.ADMIN)


@pytest.mark.integration
class TestSheetCascade:
    """Sheet and field deletion remove everything that hangs off them."""

    @pytest.fixture
    async def agent(self, db_session: AsyncSession) -> Principal:
        user = User(manager_id=ADMIN.id, username="agent-cascade", is_active=True)
        db_session.add(user)
        await db_session.commit()
        assert user.id is not None
        return Principal(id=user.id, role=Role.AGENT)

    @pytest.fixture
    async def populated_sheet(self, db_session: AsyncSession, agent: Principal) -> tuple[int, list[int]]:
        sheet = await SheetService(db_session).create_sheet(ADMIN.id, SheetCreateFactory.build())
        field_service = FieldService(db_session)
        static = await field_service.create_field(
            ADMIN, SheetFieldCreateFactory.build(sheet_id=sheet.id, type=FieldType.STATIC)
        )
        dynamic = await field_service.create_field(ADMIN, SheetFieldCreateFactory.build(sheet_id=sheet.id))
        await ShareService(db_session).grant(ADMIN, ShareGrantCreate(sheet_id=sheet.id, user_id=agent.id))

        cells = CellService(db_session)
        for principal in (ADMIN, agent):
            for field_id in (static.id, dynamic.id):
                write = CellWriteFactory.build(sheet_id=sheet.id, field_id=field_id, row_key="r1")
                await cells.write_cell(principal, write)
        return sheet.id, [static.id, dynamic.id]

    async def test_delete_sheet_removes_everything(self, db_session: AsyncSession, populated_sheet):
        sheet_id, _ = populated_sheet

        await SheetService(db_session).delete_sheet(sheet_id, ADMIN)

        assert (await db_session.exec(select(Cell).where(Cell.sheet_id == sheet_id))).all() == []
        assert (await db_session.exec(select(SheetField).where(SheetField.sheet_id == sheet_id))).all() == []
        assert (await db_session.exec(select(ShareGrant).where(ShareGrant.sheet_id == sheet_id))).all() == []
        assert await db_session.get(Sheet, sheet_id) is None

    async def test_delete_sheet_requires_owner(self, db_session: AsyncSession, populated_sheet):
        sheet_id, _ = populated_sheet

        with pytest.raises(ErrCodeError) as exc_info:
            await SheetService(db_session).delete_sheet(sheet_id, Principal(id=2, role=Role.ADMIN))
        assert exc_info.value.code == ErrCode.SHEET_NOT_FOUND
        assert await db_session.get(Sheet, sheet_id) is not None

    async def test_delete_field_removes_its_cells(self, db_session: AsyncSession, populated_sheet, agent):
        sheet_id, (static_id, dynamic_id) = populated_sheet

        await FieldService(db_session).delete_field(static_id, ADMIN)

        remaining = (await db_session.exec(select(Cell).where(Cell.sheet_id == sheet_id))).all()
        assert len(remaining) == 2
        assert {c.field_id for c in remaining} == {dynamic_id}

        rows = await CellService(db_session).list_rows(sheet_id, ADMIN)
        assert [(r.owner_user_id, r.row_key) for r in rows] == [(None, "r1"), (agent.id, "r1")]
        assert all(static_id not in r.cells for r in rows)

    async def test_duplicate_sheet_rejected(self, db_session: AsyncSession):
        service = SheetService(db_session)
        data = SheetCreateFactory.build()
        await service.create_sheet(ADMIN.id, data)

        with pytest.raises(ErrCodeError) as exc_info:
            await service.create_sheet(ADMIN.id, data)
        assert exc_info.value.code == ErrCode.SHEET_ALREADY_EXISTS

        # Another administrator may reuse number and name
        other = await service.create_sheet(2, data)
        assert other.manager_id == 2
