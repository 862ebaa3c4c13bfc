import pytest

from dbstruct.model import Field, GoType, Options, Table
from dbstruct.shared.errors import CodegenError
from dbstruct.struct_codegen.emitter import (
    GORM_CONVENTIONS_URL,
    GORM_V1_CONVENTIONS_URL,
    TAG_RULES,
    GeneratorContext,
    _quote,
    align_columns,
    go_type,
    gorm_tag,
    json_tag,
    render_struct,
    render_tables,
    struct_tag,
)


@pytest.fixture
def order_table():
    return Table(
        name="t_order",
        prefix="t_",
        comment="customer orders\nkept for 5 years",
        fields=[
            Field("id", "bigint unsigned", GoType.UINT64, key="PRI"),
            Field("user_id", "int", GoType.INT32, comment="buyer"),
            Field("note", "varchar(255)", GoType.STRING, nullable=True),
        ],
    )


class TestQuote:
    def test_quote_basic_string(self):
        assert _quote("t_order") == '"t_order"'

    def test_quote_string_with_quotes(self):
        assert _quote('say "hi"') == '"say \\"hi\\""'


class TestGormTag:
    def test_full_tag(self):
        f = Field(field="id", type="int", go_type=GoType.INT64, nullable=False, default="0", key="PRI")
        assert gorm_tag(f) == "column:id;type:int;default:0;not null;primary_key"

    def test_nullable_without_default(self):
        f = Field("note", "varchar(255)", GoType.STRING, nullable=True)
        assert gorm_tag(f) == "column:note;type:varchar(255)"

    def test_not_null_without_key(self):
        f = Field("status", "tinyint", GoType.INT8, default="1", key="MUL")
        assert gorm_tag(f) == "column:status;type:tinyint;default:1;not null"


class TestJsonTag:
    def test_json_tag(self):
        assert json_tag(Field("user_id", "int", GoType.INT32)) == "userId"


class TestStructTag:
    FIELD = Field("id", "int", GoType.INT32, key="PRI")

    def test_rule_order(self):
        assert [rule.key for rule in TAG_RULES] == ["gorm", "json"]

    def test_no_tags(self):
        assert struct_tag(Options(), self.FIELD) == ""

    def test_gorm_only(self):
        options = Options(gen_gorm_tag=True)
        assert struct_tag(options, self.FIELD) == '`gorm:"column:id;type:int;not null;primary_key"`'

    def test_json_only(self):
        assert struct_tag(Options(gen_json_tag=True), self.FIELD) == '`json:"id"`'

    def test_both_tags(self):
        options = Options(gen_gorm_tag=True, gen_json_tag=True)
        assert (
            struct_tag(options, self.FIELD)
            == '`gorm:"column:id;type:int;not null;primary_key" json:"id"`'
        )

    def test_backtick_in_default(self):
        f = Field("code", "varchar(8)", GoType.STRING, default="`x`")
        tag = struct_tag(Options(gen_gorm_tag=True), f)
        assert tag.startswith('"') and tag.endswith('"')


class TestGoType:
    TABLE = Table(name="t")

    @pytest.mark.parametrize(
        "go_type_value,nullable,expected",
        [
            (GoType.INT64, False, "int64"),
            (GoType.INT64, True, "*int64"),
            (GoType.BYTES, False, "[]byte"),
            (GoType.BYTES, True, "*[]byte"),
            (GoType.TIME, True, "*time.Time"),
            ("uint16", False, "uint16"),
        ],
    )
    def test_spelling(self, go_type_value, nullable, expected):
        f = Field("c", "raw", go_type_value, nullable=nullable)
        assert go_type(f, self.TABLE) == expected

    def test_unknown_type(self):
        f = Field("c", "raw", "complex128")
        with pytest.raises(CodegenError) as exc_info:
            go_type(f, self.TABLE)
        assert exc_info.value.column == "c"


class TestAlignColumns:
    def test_aligns_like_gofmt(self):
        rows = [
            ["Id", "int32"],
            ["NickName", "*string", "// nick"],
            ["Age", "uint8", "// years"],
        ]
        assert align_columns(rows) == [
            "Id       int32",
            "NickName *string // nick",
            "Age      uint8   // years",
        ]

    def test_runs_are_aligned_separately(self):
        rows = [
            ["A", "int8", "// a"],
            ["LongName", "string"],
            ["B", "float64", "// b"],
        ]
        assert align_columns(rows) == [
            "A        int8 // a",
            "LongName string",
            "B        float64 // b",
        ]

    def test_empty(self):
        assert align_columns([]) == []


class TestRenderStruct:
    def test_plain_struct(self):
        table = Table(
            name="users",
            fields=[
                Field("id", "int", GoType.INT32, key="PRI"),
                Field("nick_name", "varchar(32)", GoType.STRING, nullable=True, comment="nick\nname"),
            ],
        )

        rendered = render_struct(Options(), table)

        assert rendered == (
            "// Users table: users\n"
            "type Users struct {\n"
            "\tId       int32\n"
            "\tNickName *string // nick name\n"
            "}"
        )
        assert table.go_struct == rendered

    def test_tagged_struct_with_accessor(self, order_table):
        options = Options(gen_gorm_tag=True, gen_json_tag=True)

        rendered = render_struct(options, order_table)

        assert rendered == (
            "// Order table: t_order\n"
            "// customer orders kept for 5 years\n"
            "type Order struct {\n"
            '\tId     uint64  `gorm:"column:id;type:bigint unsigned;not null;primary_key" json:"id"`\n'
            '\tUserId int32   `gorm:"column:user_id;type:int;not null" json:"userId"` // buyer\n'
            '\tNote   *string `gorm:"column:note;type:varchar(255)" json:"note"`\n'
            "}\n"
            "\n"
            f"// TableName set table of t_order, ref document see {GORM_CONVENTIONS_URL}\n"
            "func (Order) TableName() string {\n"
            '\treturn "t_order"\n'
            "}"
        )

    def test_no_accessor_without_prefix(self, order_table):
        order_table.prefix = ""

        rendered = render_struct(Options(), order_table)

        assert "TableName" not in rendered
        assert "type TOrder struct {" in rendered

    def test_gorm_v1_link(self, order_table):
        rendered = render_struct(Options(gorm_v1=True), order_table)
        assert GORM_V1_CONVENTIONS_URL in rendered

    def test_empty_table(self):
        rendered = render_struct(Options(), Table(name="t_empty", prefix="t_"))
        assert "type Empty struct {\n}" in rendered

    def test_unknown_type_emits_nothing(self):
        table = Table(name="odd", fields=[Field("value", "raw", "complex64")])

        with pytest.raises(CodegenError):
            render_struct(Options(), table)

        assert table.go_struct == ""

    def test_clashing_field_names(self):
        table = Table(
            name="users",
            fields=[
                Field("user_id", "int", GoType.INT32),
                Field("UserId", "int", GoType.INT32),
            ],
        )
        with pytest.raises(CodegenError, match="clashes"):
            render_struct(Options(), table)

    def test_field_clashes_with_accessor(self):
        table = Table(
            name="t_doc",
            prefix="t_",
            fields=[Field("table_name", "varchar(64)", GoType.STRING)],
        )
        with pytest.raises(CodegenError, match=r"\[t_doc\.table_name\].*TableName\(\) accessor"):
            render_struct(Options(), table)

        assert table.go_struct == ""

    def test_table_name_field_without_accessor(self):
        table = Table(name="docs", fields=[Field("table_name", "varchar(64)", GoType.STRING)])

        rendered = render_struct(Options(), table)

        assert "\tTableName string\n" in rendered
        assert "func (Docs) TableName()" not in rendered

    def test_unnamed_struct(self):
        with pytest.raises(CodegenError, match="empty struct name"):
            render_struct(Options(), Table(name="t_", prefix="t_"))

    def test_explicit_context(self, order_table):
        ctx = GeneratorContext()
        assert render_struct(Options(), order_table, ctx) == render_struct(Options(), order_table)

    def test_deterministic(self, order_table):
        options = Options(gen_gorm_tag=True, gen_json_tag=True)
        assert render_struct(options, order_table) == render_struct(options, order_table)


class TestRenderTables:
    def test_sequential_and_parallel_agree(self):
        tables = [
            Table(name=f"table_{i}", fields=[Field("id", "int", GoType.INT32)])
            for i in range(8)
        ]

        sequential = render_tables(Options(), tables)
        parallel = render_tables(Options(), tables, parallel=True, max_workers=4)

        assert sequential == parallel
        assert [s.splitlines()[0] for s in parallel] == [
            f"// Table{i} table: table_{i}" for i in range(8)
        ]

    def test_empty(self):
        assert render_tables(Options(), []) == []

    @pytest.mark.parametrize("parallel", [False, True])
    def test_struct_name_clash(self, parallel):
        tables = [
            Table(name="order", fields=[Field("id", "int", GoType.INT32)]),
            Table(name="t_order", prefix="t_", fields=[Field("id", "int", GoType.INT32)]),
        ]

        with pytest.raises(CodegenError, match=r"\[t_order\] struct name 'Order' clashes"):
            render_tables(Options(), tables, parallel=parallel)

        assert [t.go_struct for t in tables] == ["", ""]
