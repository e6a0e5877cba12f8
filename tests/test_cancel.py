from weatherpal.utils.cancel import CancelToken


def test_new_token_is_live() -> None:
    token = CancelToken()
    assert not token.cancelled
    assert token.reason is None
    assert token.remaining() is None


def test_first_reason_wins() -> None:
    token = CancelToken()
    token.cancel("superseded")
    token.cancel("session closed")
    assert token.cancelled
    assert token.reason == "superseded"


def test_deadline_expiry_cancels_with_timeout() -> None:
    token = CancelToken(timeout=0.0)
    assert token.expired
    assert token.cancelled
    assert token.reason == "timeout"
    assert token.remaining() == 0.0


def test_remaining_counts_down() -> None:
    token = CancelToken(timeout=60.0)
    remaining = token.remaining()
    assert remaining is not None
    assert 0 < remaining <= 60.0
    assert not token.cancelled
