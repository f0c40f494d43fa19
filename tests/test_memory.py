"""InMemoryFlagshipClient のユニットテスト"""

import pytest
from k1s0_abtasty_provider import FetchStatus, InMemoryFlag, InMemoryFlagshipClient, SdkStatus


async def test_start_sets_ready() -> None:
    """start 後に READY になること。"""
    client = InMemoryFlagshipClient()
    assert client.get_status() == SdkStatus.NOT_INITIALIZED
    await client.start("env", "key", {})
    assert client.get_status() == SdkStatus.READY


async def test_start_without_credentials_fails() -> None:
    """認証情報がない場合は FAILED になり例外を送出すること。"""
    client = InMemoryFlagshipClient()
    with pytest.raises(ValueError):
        await client.start("", "key", {})
    assert client.get_status() == SdkStatus.FAILED


def test_new_visitor_defaults() -> None:
    """ID 省略時は匿名 ID が払い出され、同意は True になること。"""
    client = InMemoryFlagshipClient()
    visitor = client.new_visitor(context={"a": 1})
    assert visitor.visitor_id
    assert visitor.has_consented is True
    assert visitor.fetch_status == FetchStatus.FETCH_REQUIRED
    assert client.visitors == [visitor]


def test_anonymous_visitors_get_distinct_ids() -> None:
    """匿名訪問者ごとに異なる ID が払い出されること。"""
    client = InMemoryFlagshipClient()
    a = client.new_visitor(context={})
    b = client.new_visitor(context={})
    assert a.visitor_id != b.visitor_id


async def test_flags_are_stale_until_fetched() -> None:
    """取得前に追加されたフラグは次回取得まで見えないこと。"""
    client = InMemoryFlagshipClient()
    visitor = client.new_visitor(visitor_id="u1", context={})
    await visitor.fetch_flags()

    client.set_flag(InMemoryFlag(key="new-flag", value="on"))
    assert visitor.get_flag("new-flag") is None

    await visitor.fetch_flags()
    assert visitor.get_flag("new-flag") is not None
    assert visitor.fetch_count == 2


async def test_update_context_marks_fetch_required_only_on_change() -> None:
    """属性が変化した場合のみ FETCH_REQUIRED になること。"""
    client = InMemoryFlagshipClient()
    visitor = client.new_visitor(visitor_id="u1", context={"plan": "free"})
    await visitor.fetch_flags()

    visitor.update_context({"plan": "free"})
    assert visitor.fetch_status == FetchStatus.FETCHED

    visitor.update_context({"plan": "pro"})
    assert visitor.fetch_status == FetchStatus.FETCH_REQUIRED
    assert visitor.context == {"plan": "pro"}


def test_set_consent() -> None:
    """set_consent で同意状態が更新されること。"""
    client = InMemoryFlagshipClient()
    visitor = client.new_visitor(visitor_id="u1", context={}, has_consented=True)
    visitor.set_consent(False)
    assert visitor.has_consented is False
    assert visitor.set_consent_calls == [False]


@pytest.mark.parametrize(
    ("value", "default", "expected"),
    [
        (True, False, True),
        ("on", False, False),
        (1, True, True),
        (3, 0, 3),
        (2.5, 0, 2.5),
        ("text", "", "text"),
        ({"a": 1}, {}, {"a": 1}),
        (None, "default", "default"),
        ("any", None, "any"),
    ],
)
def test_flag_get_value_type_check(value, default, expected) -> None:
    """型が一致しない場合はデフォルト値を返すこと。"""
    assert InMemoryFlag(key="f", value=value).get_value(default) == expected


async def test_close() -> None:
    """close でクローズ済みになること。"""
    client = InMemoryFlagshipClient()
    await client.close()
    assert client.closed is True
