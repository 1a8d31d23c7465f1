import pytest

from complexnet import IndexOutOfRange, Network
from complexnet.core.properties import PropertyTable
from complexnet.core.structure import PropertyKind, Scope


@pytest.fixture
def table():
    return PropertyTable(n_nodes=3, n_links=2)


class TestDefinitions:
    def test_define_fills_default(self, table):
        table.define("score")
        table.define("active", "bool", "link")
        assert table.column("score") == [0.0, 0.0, 0.0]
        assert table.column("active") == [False, False]
        assert table.kind("active") is PropertyKind.BOOL
        assert table.scope("active") is Scope.LINK
        assert table.names("node") == ["score"]

    def test_duplicate_and_reserved_names(self, table):
        table.define("score")
        with pytest.raises(ValueError):
            table.define("score", "int", "link")
        with pytest.raises(ValueError):
            table.define("node")
        with pytest.raises(ValueError):
            table.define("x", "complex")

    def test_undefine(self, table):
        table.define("tag", "text")
        table.undefine("tag")
        assert not table.has("tag")
        assert table.frame("node").columns == ["node"]
        with pytest.raises(KeyError):
            table.get("tag", 0)


class TestValues:
    def test_set_coerces_to_kind(self, table):
        table.define("count", "int")
        table.define("name", "text")
        table.set("count", 1, 7.0)
        table.set("name", 2, 42)
        assert table.get("count", 1) == 7
        assert table.get("name", 2) == "42"
        assert table.column("count") == [0, 7, 0]

    def test_row_bounds(self, table):
        table.define("score")
        with pytest.raises(IndexOutOfRange):
            table.set("score", 3, 1.0)
        with pytest.raises(IndexOutOfRange):
            table.get("score", -1)

    def test_pending_rows_take_defaults(self, table):
        table.define("score")
        table.set("score", 0, 1.5)
        table.append_rows("node", 2)
        assert table.size("node") == 5
        assert table.column("score") == [1.5, 0.0, 0.0, 0.0, 0.0]
        assert table.frame("node")["node"].to_list() == [0, 1, 2, 3, 4]

    def test_remove_rows_rekeys(self, table):
        table.define("score")
        for i in range(3):
            table.set("score", i, float(i))
        table.remove_row("node", 0)
        df = table.frame("node")
        assert df["node"].to_list() == [0, 1]
        assert df["score"].to_list() == [1.0, 2.0]

    def test_copy_is_independent(self, table):
        table.define("score")
        other = table.copy()
        other.set("score", 0, 9.0)
        assert table.get("score", 0) == 0.0


class TestNetworkIntegration:
    def test_link_properties_follow_removals(self, paw):
        paw.define_property("w2", "double", "link")
        for i in range(paw.link_count):
            paw.set_property("w2", i, 10.0 * i)
        paw.remove_link(1, 2)
        assert paw.properties.column("w2") == [0.0, 20.0, 30.0]
        paw.remove_node(3)
        assert paw.properties.column("w2") == [0.0, 20.0]

    def test_node_properties_follow_growth_and_removal(self):
        net = Network(5)
        net.add_nodes(2)
        net.define_property("label", "text")
        net.set_property("label", 1, "b")
        net.add_nodes(2)
        assert net.properties.column("label") == ["", "b", "", ""]
        net.remove_node(0)
        assert net.get_property("label", 0) == "b"
        assert net.nodes_view()["label"].to_list() == ["b", "", ""]
