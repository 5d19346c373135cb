from jpcs_connect.checkin.factory import ResolutionStrategyFactory
from jpcs_connect.checkin.policy import CheckinPolicy, LookupKey
from jpcs_connect.checkin.strategies.strict_strategy import StrictResolution
from jpcs_connect.checkin.strategies.walkin_strategy import WalkInResolution, placeholder_fields


class Settings:
    CHECKIN_ALLOW_WALK_INS = True
    CHECKIN_REQUIRE_REGISTRATION = False
    CHECKIN_PER_DAY = False
    CHECKIN_LOOKUP_KEY = "UID"


def test_factory_strict_by_default():
    strategy = ResolutionStrategyFactory().for_policy(CheckinPolicy())

    assert isinstance(strategy, StrictResolution)
    assert strategy.lookup_key == LookupKey.STUDENT_ID


def test_factory_walk_in_when_allowed():
    strategy = ResolutionStrategyFactory().for_policy(CheckinPolicy(allow_walk_ins=True, lookup_key=LookupKey.UID))

    assert isinstance(strategy, WalkInResolution)
    assert strategy.lookup_key == LookupKey.UID


def test_policy_from_settings():
    policy = CheckinPolicy.from_settings(Settings)

    assert policy == CheckinPolicy(
        allow_walk_ins=True,
        require_registration=False,
        per_day=False,
        lookup_key=LookupKey.UID,
    )


def test_policy_from_empty_settings_uses_defaults():
    assert CheckinPolicy.from_settings(object()) == CheckinPolicy()


def test_placeholder_fields():
    fields = placeholder_fields("2021-00999")

    assert fields["studentId"] == "2021-00999"
    assert fields["displayName"] == "Student 2021-00999"
    assert fields["fullName"] == "Unregistered Student 2021-00999"
    assert fields["isRegistered"] is False
    assert fields["firebaseUid"] is None
