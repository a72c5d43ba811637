from __future__ import annotations

import pytest
from pydantic import ValidationError

from simplemail.address import MailAddress
from simplemail.errors import InvalidAddressError, NullArgumentError
from simplemail.models import FrozenMail, Mail


def test_fluent_setters_return_the_same_mail() -> None:
    mail = Mail()

    assert mail.with_sender("a@example.com") is mail
    assert mail.add_to("b@example.com") is mail
    assert mail.add_cc("c@example.com") is mail
    assert mail.add_bcc("d@example.com") is mail
    assert mail.with_subject("s") is mail
    assert mail.with_text("t") is mail
    assert mail.with_html("<p>h</p>") is mail


def test_new_mail_is_empty_and_incomplete() -> None:
    mail = Mail()

    assert mail.sender is None
    assert mail.to == ()
    assert mail.cc == ()
    assert mail.bcc == ()
    assert mail.subject is None
    assert mail.is_complete() is False


def test_sender_recipient_and_text_make_mail_complete(complete_mail: Mail) -> None:
    assert complete_mail.is_complete() is True


def test_html_alone_is_enough_body() -> None:
    mail = Mail().with_sender("a@example.com").add_to("b@example.com").with_html("<b>hi</b>")

    assert mail.is_complete() is True


@pytest.mark.parametrize("missing", ["sender", "to", "text"])
def test_removing_any_required_field_makes_mail_incomplete(missing: str) -> None:
    mail = Mail()
    if missing != "sender":
        mail.with_sender("user@x.com")
    if missing != "to":
        mail.add_to("friend@example.com")
    if missing != "text":
        mail.with_text("hello")

    assert mail.is_complete() is False


def test_invalid_address_leaves_previous_value_in_place() -> None:
    mail = Mail().with_sender("first@example.com").add_to("one@example.com")

    with pytest.raises(InvalidAddressError):
        mail.with_sender("not an address")
    with pytest.raises(InvalidAddressError):
        mail.add_to("two@")

    assert mail.sender == MailAddress(address="first@example.com")
    assert [a.address for a in mail.to] == ["one@example.com"]


@pytest.mark.parametrize("setter", ["with_sender", "add_to", "add_cc", "add_bcc"])
def test_none_address_raises_null_argument(setter: str) -> None:
    with pytest.raises(NullArgumentError):
        getattr(Mail(), setter)(None)


def test_recipients_keep_order_and_duplicates() -> None:
    mail = Mail().add_cc("b@example.com").add_cc("a@example.com").add_cc("b@example.com")

    assert [a.address for a in mail.cc] == ["b@example.com", "a@example.com", "b@example.com"]


def test_typed_addresses_are_accepted_as_is() -> None:
    sender = MailAddress(address="app@example.com", name="App")
    mail = Mail().with_sender(sender)

    assert mail.sender is sender


def test_freeze_snapshots_current_state(complete_mail: Mail) -> None:
    frozen = complete_mail.freeze()
    complete_mail.add_to("late@example.com").with_text("changed")

    assert [a.address for a in frozen.to] == ["friend@example.com"]
    assert frozen.text == "hello"
    assert frozen.is_complete() is True
    assert frozen.freeze() is frozen


def test_frozen_mail_rejects_mutation(complete_mail: Mail) -> None:
    frozen = complete_mail.freeze()

    with pytest.raises(ValidationError):
        frozen.subject = "other"  # type: ignore[misc]


def test_frozen_mail_completeness_matches_mail() -> None:
    assert FrozenMail().is_complete() is False
    assert FrozenMail(to=(MailAddress(address="b@example.com"),), text="x").is_complete() is False


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Line one\nLine two", "Line one Line two"),
        ("Line one\r\n  Line two\r\n", "Line one Line two"),
        ("Weekly report", "Weekly report"),
        ("Menu\u2028du jour", "Menu du jour"),
    ],
)
def test_subject_line_breaks_are_folded(raw: str, expected: str) -> None:
    assert Mail().with_subject(raw).subject == expected
    assert FrozenMail(subject=raw).subject == expected


def test_subject_and_body_queries() -> None:
    mail = Mail()

    assert mail.has_subject() is False
    assert mail.has_body() is False

    mail.with_subject("").with_html("<p>x</p>")

    assert mail.has_subject() is True
    assert mail.has_body() is True
    assert mail.freeze().has_subject() is True
