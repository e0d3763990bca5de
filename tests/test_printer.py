#
# Structprint - Printer Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import io
import sys
import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any

# Third Party ----------------------------------------------------------------------------------------------------------
import pytest
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from structprint.options import PrintOptions, configure
from structprint.printer import Kind, PrettyPrinter, PrintContext, classify, pformat, pprint
from structprint.utils import hex_id


# Local Classes & Methods ----------------------------------------------------------------------------------------------

@dataclass
class Point:
    x: int
    y: int


@dataclass
class Box:
    label: str
    content: Any


@dataclass
class Pair:
    a: str
    b: str


class Node:
    def __init__(self, value, next=None):
        self.value = value
        self.next = next


class Color(Enum):
    RED = 1


class Level(IntEnum):
    HIGH = 3


class Outer:
    class Inner:
        pass

    class Mode(Enum):
        ON = "on"


class Holder:
    def __init__(self):
        self.inner = Outer.Inner()
        self.mode = Outer.Mode.ON
        self.n = 1


class Wrapper:
    """Renders itself, formatting the wrapped value through the printer."""

    def __init__(self, inner):
        self.inner = inner

    def __pformat__(self, printer):
        return f"Wrapper<{printer.pformat(self.inner)}>"


class Simple:
    def __pstr__(self):
        return "~simple~"


class Sentinel:
    __slots__ = ("payload",)
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.payload = 1
        return cls._instance


class Named:
    __pprint_name__ = "Alias"

    def __init__(self):
        self.v = 1


class BadFields:
    def __pprint_fields__(self):
        raise ValueError("cannot list fields")


class Guarded:
    @property
    def __dict__(self):
        raise RuntimeError("no attributes here")


class Unresolved:
    hint: "NoSuchType"  # noqa: F821

    def __init__(self):
        self.hint = 1


def chain(*values) -> Node:
    """Linked Nodes whose last node points back to the first."""
    nodes = [Node(v) for v in values]
    for a, b in zip(nodes, nodes[1:]):
        a.next = b
    nodes[-1].next = nodes[0]
    return nodes[0]


# Tests ----------------------------------------------------------------------------------------------------------------

class TestEndToEnd:
    def test_null(self):
        assert pformat(None) == "null"

    def test_short_list(self):
        assert pformat(["a", "bb", "ccc"]) == '["a", "bb", "ccc"]'

    def test_point(self):
        assert pformat(Point(x=1, y=2)) == "Point(x=1, y=2)"

    def test_self_reference(self):
        node = Node(1)
        node.next = node
        assert pformat(node) == "Node(value=1, next=Node)"


class TestClassify:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(None, Kind.LEAF, id="none"),
            pytest.param(True, Kind.LEAF, id="bool"),
            pytest.param(1.5, Kind.LEAF, id="float"),
            pytest.param("s", Kind.LEAF, id="str"),
            pytest.param(b"s", Kind.LEAF, id="bytes"),
            pytest.param(Color.RED, Kind.ENUM, id="enum"),
            pytest.param(Level.HIGH, Kind.ENUM, id="int-enum"),
            pytest.param(len, Kind.OPAQUE, id="builtin"),
            pytest.param(Point, Kind.OPAQUE, id="class"),
            pytest.param(sys, Kind.OPAQUE, id="module"),
            pytest.param(lambda: 1, Kind.OPAQUE, id="lambda"),
            pytest.param(Wrapper(1), Kind.PRINTABLE, id="printable"),
            pytest.param(Simple(), Kind.SIMPLE, id="simple"),
            pytest.param({}, Kind.MAPPING, id="dict"),
            pytest.param(frozendict(a=1), Kind.MAPPING, id="frozendict"),
            pytest.param([], Kind.SEQUENCE, id="list"),
            pytest.param((), Kind.SEQUENCE, id="tuple"),
            pytest.param(range(2), Kind.SEQUENCE, id="range"),
            pytest.param(set(), Kind.SET, id="set"),
            pytest.param(frozenset(), Kind.SET, id="frozenset"),
            pytest.param(Point(1, 2), Kind.RECORD, id="dataclass"),
            pytest.param(Node(1), Kind.RECORD, id="plain"),
            pytest.param(iter([]), Kind.OPAQUE, id="iterator"),
            pytest.param(object(), Kind.OPAQUE, id="object"),
        ],
    )
    def test_classify(self, obj, expected):
        assert classify(obj) is expected


class TestLeaves:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(True, "True", id="true"),
            pytest.param(0, "0", id="zero"),
            pytest.param('a"b', '"a\\"b"', id="str-escaped"),
            pytest.param(Color.RED, "Color.RED", id="enum"),
            pytest.param(Level.HIGH, "Level.HIGH", id="int-enum"),
        ],
    )
    def test_top_level(self, obj, expected):
        assert pformat(obj) == expected

    def test_opaque(self):
        assert pformat(len) == repr(len)
        assert pformat(Point) == repr(Point)

    def test_not_introspectable_uses_repr(self):
        it = iter([1, 2])
        assert pformat(it) == repr(it)
        assert list(it) == [1, 2]  # Not consumed


class TestSequences:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param([], "[]", id="empty-list"),
            pytest.param((1, 2), "[1, 2]", id="tuple"),
            pytest.param(range(3), "[0, 1, 2]", id="range"),
            pytest.param([None, True, 1.5], "[null, True, 1.5]", id="leaves"),
            pytest.param([[1], [2, 3]], "[[1], [2, 3]]", id="nested"),
            pytest.param({1, 2, 3}, "{1, 2, 3}", id="set"),
            pytest.param(frozenset(), "{}", id="empty-frozenset"),
        ],
    )
    def test_compact(self, obj, expected):
        assert pformat(obj) == expected

    def test_truncation(self):
        out = pformat(["ab"] * 10, max_items=5)
        assert out == '["ab", "ab", "ab", "ab", "ab", ...]'
        assert out.count('"ab"') == 5

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param([1, 2], "[]", id="list"),
            pytest.param({1, 2}, "{}", id="set"),
            pytest.param({"a": 1}, "{}", id="dict"),
            pytest.param(frozendict(a=1), "{}", id="frozendict"),
        ],
    )
    def test_zero_max_items(self, obj, expected):
        assert pformat(obj, max_items=0) == expected

    def test_compact_wraps_without_indent(self):
        out = pformat(list(range(100, 120)), width=30)
        lines = out.split("\n")
        assert len(lines) > 1
        assert out.startswith("[100, ") and out.endswith("119]")
        assert not any(line.startswith(" ") for line in lines)

    def test_exploded_for_ragged_items(self):
        items = ["x" * n for n in range(1, 81)]
        out = pformat(items, max_items=100)
        lines = out.split("\n")
        assert lines[0] == "["
        assert lines[-1] == "]"
        assert all(line.startswith("    ") for line in lines[1:-1])
        assert out.count('"') == 160

    def test_exploded_records(self):
        out = pformat([Point(1, 2), Point(3, 4)])
        assert out == "[\n    Point(x=1, y=2), Point(x=3, y=4)\n]"

    def test_one_per_line(self):
        out = pformat([Point(1, 2), Point(3, 4)], multiple_per_line=False)
        assert out == "[\n    Point(x=1, y=2),\n    Point(x=3, y=4)\n]"

    def test_self_containing_list(self):
        lst = [1]
        lst.append(lst)
        assert pformat(lst) == "[1, [...]]"

    def test_shared_list_printed_twice(self):
        inner = [1]
        assert pformat([inner, inner]) == "[[1], [1]]"


class TestMappings:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param({}, "{}", id="empty"),
            pytest.param({"a": 1}, '{"a": 1}', id="single"),
            pytest.param({1: [1, 2], None: {"k": False}}, '{1: [1, 2], null: {"k": False}}', id="nested"),
            pytest.param(frozendict({"a": 1}), '{"a": 1}', id="frozendict"),
            pytest.param({Color.RED: Point(1, 2)}, "{Color.RED: Point(x=1, y=2)}", id="enum-key"),
        ],
    )
    def test_single_line(self, obj, expected):
        assert pformat(obj) == expected

    def test_width_boundary(self):
        """Single line iff the joined entries fit the width."""
        at_width = {"k": "x" * 13}  # '"k": "xxxxxxxxxxxxx"' is 20 chars
        over_width = {"k": "x" * 14}
        assert pformat(at_width, width=20) == '{"k": "' + "x" * 13 + '"}'
        assert pformat(over_width, width=20) == '{\n    "k": "' + "x" * 14 + '"\n}'

    def test_multi_line(self):
        out = pformat({"key": "value", "other": 1}, width=20)
        assert out == '{\n    "key": "value",\n    "other": 1\n}'

    def test_multi_line_record_value(self):
        """Only the first line of an entry is indented, no rails."""
        out = pformat({"k": Box("a" * 30, "b" * 30)}, width=40)
        assert out == (
            '{\n'
            '    "k": Box(\n'
            '    label="' + "a" * 30 + '",\n'
            '    content="' + "b" * 30 + '"\n'
            ')\n'
            '}'
        )

    def test_truncation(self):
        assert pformat({i: i for i in range(5)}, max_items=2) == "{0: 0, 1: 1, ...}"

    def test_self_containing_dict(self):
        d = {}
        d["self"] = d
        assert pformat(d) == '{"self": {...}}'


class TestRecords:
    def test_width_boundary(self):
        """Single line iff len(name) + 3 + sum(fields) + 2 * count <= width."""
        at_width = Pair("x", "y" * 10)  # 4 + 3 + 5 + 14 + 4 == 30
        over_width = Pair("x", "y" * 11)
        assert pformat(at_width, width=30) == 'Pair(a="x", b="' + "y" * 10 + '")'
        assert pformat(over_width, width=30) == 'Pair(\n    a="x",\n    b="' + "y" * 11 + '"\n)'

    def test_single_field_never_wraps(self):
        assert pformat(Box("l" * 50, None), width=10, skip_none=True) == 'Box(label="' + "l" * 50 + '")'

    def test_nested_multi_line_with_rails(self):
        box = Box("outer", Box("inner", [1, 2, 3]))
        assert pformat(box, width=30) == (
            'Box(\n'
            '    label="outer",\n'
            '    content=Box(\n'
            '    |    label="inner",\n'
            '    |    content=[1, 2, 3]\n'
            '    )\n'
            ')'
        )

    def test_nested_multi_line_without_rails(self):
        box = Box("outer", Box("inner", [1, 2, 3]))
        assert pformat(box, width=30, with_rails=False) == (
            'Box(\n'
            '    label="outer",\n'
            '    content=Box(\n'
            '        label="inner",\n'
            '        content=[1, 2, 3]\n'
            '    )\n'
            ')'
        )

    def test_custom_indent(self):
        assert pformat(Pair("x", "y" * 11), width=30, indent="\t") == 'Pair(\n\ta="x",\n\tb="' + "y" * 11 + '"\n)'

    def test_no_fields(self):
        assert pformat(Outer.Inner()) == "Inner"

    def test_skip_none(self):
        assert pformat(Node(1)) == "Node(value=1, next=null)"
        assert pformat(Node(1), skip_none=True) == "Node(value=1)"

    def test_skip_inner(self):
        assert pformat(Holder()) == "Holder(mode=Mode.ON, n=1)"
        assert pformat(Holder(), skip_inner=False) == "Holder(inner=Inner, mode=Mode.ON, n=1)"

    def test_with_types(self):
        assert pformat(Point(1, 2), with_types=True) == "Point(x: int=1, y: int=2)"
        assert pformat(Node(1), with_types=True) == "Node(value: Any=1, next: Any=null)"

    def test_with_types_unresolved_warns(self):
        with pytest.warns(RuntimeWarning, match="Failed to resolve type hints of Unresolved"):
            out = pformat(Unresolved(), with_types=True, on_error="warn")
        assert out == "Unresolved(hint: NoSuchType=1)"

    def test_name_override(self):
        assert pformat(Named()) == "Alias(v=1)"

    def test_with_ids_uses_class_name(self):
        named = Named()
        assert pformat(named, with_ids=True) == f"Named#{hex_id(named)}(v=1)"

    def test_singleton(self):
        assert pformat(Sentinel()) == "Sentinel"
        assert pformat(Sentinel(), with_ids=True) == "Sentinel"

    def test_private_fields(self):
        node = Node(1)
        node._cache = 2
        assert pformat(node) == "Node(value=1, next=null, _cache=2)"
        assert pformat(node, include_private=False) == "Node(value=1, next=null)"

    def test_record_fields_not_truncated(self):
        @dataclass
        class Wide:
            a: int = 1
            b: int = 2
            c: int = 3

        assert pformat(Wide(), max_items=1) == "Wide(a=1, b=2, c=3)"


class TestCycles:
    @pytest.mark.parametrize("length", [1, 2, 3, 7])
    def test_cycle_terminates(self, length):
        head = chain(*range(length))
        out = pformat(head, width=10_000)
        assert out.count("Node(") == length
        assert out.count("next=Node)") == 1

    def test_three_cycle(self):
        assert pformat(chain(1, 2, 3)) == "Node(value=1, next=Node(value=2, next=Node(value=3, next=Node)))"

    def test_with_ids_seen_marker(self):
        node = Node(1)
        node.next = node
        name = f"Node#{hex_id(node)}"
        assert pformat(node, with_ids=True) == f"{name}(value=1, next=<{name} (seen)>)"

    def test_shared_record_printed_once(self):
        p = Point(1, 2)
        assert pformat([p, p]) == "[\n    Point(x=1, y=2), Point\n]"

    def test_equal_records_printed_in_full(self):
        assert pformat([Point(1, 2), Point(1, 2)]) == "[\n    Point(x=1, y=2), Point(x=1, y=2)\n]"

    def test_cycle_through_custom_printable(self):
        node = Node(None)
        node.value = Wrapper(node)
        assert pformat(node) == "Node(value=Wrapper<Node>, next=null)"

    def test_tracker_isolation(self):
        """Same cyclic value twice gives the same text, no state leaks between calls."""
        printer = PrettyPrinter()
        head = chain(1, 2)
        assert printer.pformat(head) == printer.pformat(head)
        assert pformat(head) == pformat(head)


class TestCustomPrintables:
    def test_printable(self):
        assert pformat(Wrapper([1, 2])) == "Wrapper<[1, 2]>"

    def test_printable_receives_context(self):
        seen = []

        class Spy:
            def __pformat__(self, printer):
                seen.append(printer)
                return "spy"

        pformat([Spy()])
        assert isinstance(seen[0], PrintContext)

    def test_simple(self):
        assert pformat({"s": Simple()}) == '{"s": ~simple~}'


class TestFailures:
    def test_error_propagates(self):
        with pytest.raises(ValueError, match="cannot list fields"):
            pformat(Box("b", BadFields()))

    def test_tracker_reset_after_failure(self):
        ctx = PrintContext(PrintOptions())
        with pytest.raises(ValueError):
            ctx.render(Box("b", [Point(1, 2), BadFields()]))
        assert len(ctx.seen) == 0

    def test_tracker_reset_after_success(self):
        ctx = PrintContext(PrintOptions())
        ctx.render(chain(1, 2))
        assert len(ctx.seen) == 0

    def test_printer_reusable_after_failure(self):
        printer = PrettyPrinter()
        p = Point(1, 2)
        with pytest.raises(ValueError):
            printer.pformat([p, BadFields()])
        assert printer.pformat(p) == "Point(x=1, y=2)"

    def test_deep_graph_recursion_error(self):
        head = None
        for i in range(sys.getrecursionlimit() * 2):
            head = Node(i, head)
        ctx = PrintContext(PrintOptions())
        with pytest.raises(RecursionError):
            ctx.render(head)
        assert len(ctx.seen) == 0


class TestOnError:
    def test_skip(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            out = pformat([Guarded()])
        assert "Guarded object" in out

    def test_warn(self):
        with pytest.warns(RuntimeWarning, match="Failed to read attributes of Guarded"):
            out = pformat([Guarded()], on_error="warn")
        assert "Guarded object" in out

    def test_raise(self):
        with pytest.raises(RuntimeError, match="no attributes here"):
            pformat({"g": Guarded()}, on_error="raise")


class TestPrettyPrinter:
    def test_module_default_options(self):
        configure(width=20)
        assert PrettyPrinter().options.width == 20
        assert pformat({"key": "value", "other": 1}).startswith("{\n")

    def test_explicit_options_and_overrides(self):
        printer = PrettyPrinter(PrintOptions.compact(), width=25)
        assert printer.options == PrintOptions.compact().merge(width=25)

    def test_options_type_checked(self):
        with pytest.raises(TypeError, match="options must be a PrintOptions instance"):
            PrettyPrinter({"width": 10})

    def test_shared_across_threads(self):
        printer = PrettyPrinter()
        head = chain(*range(5))
        expected = printer.pformat(head)
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(printer.pformat, [head] * 64))
        assert results == [expected] * 64


class TestPprint:
    def test_stdout(self, capsys):
        pprint(Point(1, 2))
        assert capsys.readouterr().out == "Point(x=1, y=2)\n"

    def test_file(self):
        buf = io.StringIO()
        PrettyPrinter().pprint([1, 2], file=buf)
        assert buf.getvalue() == "[1, 2]\n"

    def test_overrides(self, capsys):
        pprint(Node(1), skip_none=True)
        assert capsys.readouterr().out == "Node(value=1)\n"
