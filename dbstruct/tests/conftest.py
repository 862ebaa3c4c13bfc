import pytest

from dbstruct.model import RawColumn, RawTable


@pytest.fixture
def raw_tables():
    return [
        RawTable(
            name="t_order",
            comment="customer orders\nkept for 5 years",
            columns=(
                RawColumn("id", "bigint(20) unsigned", key="PRI", default=""),
                RawColumn("user_id", "int", comment="buyer"),
                RawColumn("amount", "decimal(10,2)", default="0.00"),
                RawColumn("note", "varchar(255)", nullable=True),
                RawColumn("created_at", "datetime", nullable=True),
            ),
        ),
        RawTable(
            name="logs",
            columns=(RawColumn("id", "int", key="PRI"),),
        ),
        RawTable(
            name="users",
            comment="",
            columns=(
                RawColumn("id", "int", key="PRI", default="0"),
                RawColumn("nick_name", "varchar(32)", nullable=True),
            ),
        ),
    ]
