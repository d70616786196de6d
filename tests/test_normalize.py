from hypothesis import given
from hypothesis import strategies as st

from entity_match.engine import normalize_email, normalize_phone, normalize_url


def test_normalize_phone_keeps_digits_only() -> None:
    assert normalize_phone("+54 (11) 4000-0001") == "541140000001"
    assert normalize_phone("11.4000.0001") == "1140000001"
    assert normalize_phone("n/a") == ""
    assert normalize_phone("") == ""
    assert normalize_phone(None) == ""


def test_normalize_url_strips_scheme_www_and_trailing_slash() -> None:
    assert normalize_url("https://www.acme.com/") == "acme.com"
    assert normalize_url("http://acme.com") == "acme.com"
    assert normalize_url("HTTPS://WWW.Acme.com/") == "acme.com"
    assert normalize_url("http://www.acme.com") == "acme.com"
    assert normalize_url("www.acme.com") == "www.acme.com"
    assert normalize_url("acme.com/catalog/") == "acme.com/catalog"
    assert normalize_url("ftp://acme.com") == "ftp://acme.com"
    assert normalize_url(None) == ""


def test_normalize_email() -> None:
    assert normalize_email("  Ventas@Acme.COM ") == "ventas@acme.com"
    assert normalize_email(None) == ""


@given(st.text())
def test_normalize_phone_is_idempotent(value: str) -> None:
    once = normalize_phone(value)
    assert normalize_phone(once) == once


@given(st.text())
def test_normalize_url_is_idempotent(value: str) -> None:
    once = normalize_url(value)
    assert normalize_url(once) == once


@given(st.sampled_from(["http://", "https://"]), st.sampled_from(["www.", ""]), st.sampled_from(["/", ""]))
def test_url_variants_share_a_normal_form(scheme: str, www: str, slash: str) -> None:
    assert normalize_url(f"{scheme}{www}acme.com{slash}") == "acme.com"


@given(st.sampled_from(["/", "//", ""]))
def test_bare_www_without_scheme_is_kept(slash: str) -> None:
    assert normalize_url(f"WWW.Acme.com{slash}") == "www.acme.com"
    assert normalize_url(f"acme.com{slash}") == "acme.com"
