from logfmtlog.spans import Span, current_span, span


def test_no_current_span_outside_block():
    assert current_span() is None


def test_entered_span_becomes_current():
    with span("top") as top:
        assert current_span() is top
    assert current_span() is None


def test_nested_spans_link_to_parent():
    with span("top") as top:
        with span("middle") as middle:
            assert middle.parent is top
            assert current_span() is middle
        assert current_span() is top


def test_scope_from_root_orders_outermost_first():
    with span("top"):
        with span("middle"):
            with span("bottom") as bottom:
                names = [s.name for s in bottom.scope_from_root()]
    assert names == ["top", "middle", "bottom"]


def test_root_scope_is_only_itself():
    root = span("alone")
    assert list(root.scope_from_root()) == [root]


def test_fields_are_kept():
    created = span("req", user="alice", count=3)
    assert created.fields == {"user": "alice", "count": 3}
    assert created.name == "req"


def test_span_created_outside_block_has_no_parent():
    with span("outer"):
        pass
    later = span("later")
    assert later.parent is None


def test_reentering_restores_previous():
    outer = Span("outer")
    inner = Span("inner", parent=outer)
    with outer:
        with inner:
            assert current_span() is inner
        with inner:
            assert current_span() is inner
        assert current_span() is outer
    assert current_span() is None