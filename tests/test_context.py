"""評価コンテキストのユニットテスト"""

from datetime import datetime

from k1s0_abtasty_provider import EvaluationContext, VisitorInfo, to_primitive_record


def test_from_mapping_splits_reserved_fields() -> None:
    """targetingKey と fsVisitorInfo が属性バッグから分離されること。"""
    ctx = EvaluationContext.from_mapping(
        {
            "targetingKey": "user-123",
            "fsVisitorInfo": {"hasConsented": True, "isAuthenticated": False},
            "age": 30,
        }
    )
    assert ctx.targeting_key == "user-123"
    assert ctx.visitor_info == VisitorInfo(has_consented=True, is_authenticated=False)
    assert ctx.attributes == {"age": 30}
    assert ctx.has_consented is True


def test_from_mapping_none_is_anonymous() -> None:
    """None からは匿名・同意未定義のコンテキストになること。"""
    ctx = EvaluationContext.from_mapping(None)
    assert ctx.targeting_key is None
    assert ctx.visitor_info is None
    assert ctx.has_consented is None
    assert ctx.attributes == {}


def test_from_mapping_accepts_visitor_info_instance() -> None:
    """fsVisitorInfo に VisitorInfo をそのまま渡せること。"""
    info = VisitorInfo(has_consented=False)
    ctx = EvaluationContext.from_mapping({"fsVisitorInfo": info})
    assert ctx.visitor_info is info


def test_from_mapping_does_not_mutate_input() -> None:
    """入力マッピングを変更しないこと。"""
    data = {"targetingKey": "u1", "plan": "free"}
    EvaluationContext.from_mapping(data)
    assert data == {"targetingKey": "u1", "plan": "free"}


def test_to_primitive_record_keeps_primitives() -> None:
    """文字列・数値・真偽値のみ残ること。"""
    record = to_primitive_record(
        {
            "name": "Test User",
            "age": 30,
            "score": 1.5,
            "beta": False,
            "empty": "",
            "nothing": None,
            "nested": {"a": 1},
            "tags": ["x", "y"],
            "callback": lambda: None,
            "created_at": datetime(2024, 1, 1),
        }
    )
    assert record == {
        "name": "Test User",
        "age": 30,
        "score": 1.5,
        "beta": False,
        "empty": "",
    }


def test_to_primitive_record_empty() -> None:
    """空の属性バッグは空辞書になること。"""
    assert to_primitive_record({}) == {}
