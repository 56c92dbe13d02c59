import pytest

import core.policy as policy_mod
from core.errors import Expired
from core.policy import RevalidationAction, StaleOutcome, TtlPolicy, TtlSetting


def test_policy_defaults():
    p = TtlPolicy()

    assert p.action is RevalidationAction.EXPIRE
    assert p.setting is TtlSetting.BLOCKING
    assert p.duration == 10
    assert p.expiration is None


def test_policy_without_expiration_is_always_fresh(clock):
    p = TtlPolicy(clock=clock)
    clock.advance(10_000)

    p.validate_expiration()
    assert p.is_fresh() is True


def test_policy_expires_sets_instant_and_duration(clock):
    p = TtlPolicy(clock=clock).expires(5)

    assert p.expiration == 1005.0
    assert p.duration == 5


def test_policy_fresh_at_boundary_and_stale_after(clock):
    p = TtlPolicy(clock=clock).expires(5)

    clock.advance(5)
    p.validate_expiration()

    clock.advance(0.001)
    with pytest.raises(Expired):
        p.validate_expiration()


def test_policy_builders_do_not_mutate_receiver(clock):
    base = TtlPolicy(clock=clock)

    changed = base.expires(3).revalidate(True)

    assert base.expiration is None
    assert base.action is RevalidationAction.EXPIRE
    assert changed.action is RevalidationAction.REVALIDATE


def test_policy_revalidate_false_restores_expire():
    p = TtlPolicy().revalidate(True).revalidate(False)
    assert p.action is RevalidationAction.EXPIRE


def test_policy_negative_seconds_rejected():
    with pytest.raises(ValueError):
        TtlPolicy().expires(-1)


def test_policy_on_stale_revalidate_serves_and_renews(clock):
    p = TtlPolicy(clock=clock).expires(1).revalidate(True)
    clock.advance(2)

    assert p.on_stale() is StaleOutcome.SERVE_STALE
    assert p.expiration == 1003.0
    assert p.is_fresh() is True


def test_policy_on_stale_expire_reports_miss_and_renews(clock):
    p = TtlPolicy(clock=clock).expires(1)
    clock.advance(2)

    assert p.on_stale() is StaleOutcome.MISS
    assert p.expiration == 1003.0


def test_policy_swr_is_accepted(clock):
    p = TtlPolicy(clock=clock).with_setting(TtlSetting.SWR)
    assert p.setting is TtlSetting.SWR


def test_policy_default_clock_uses_monotonic(monkeypatch):
    monkeypatch.setattr(policy_mod.time, "monotonic", lambda: 42.0)

    p = TtlPolicy().expires(1)

    assert p.expiration == 43.0
