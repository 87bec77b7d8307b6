import pytest

from accounts.models import ClubUser
from conftest import ClubUserFactory

pytestmark = pytest.mark.django_db


def test_guide_id_requires_guide_flag(club_user_factory: ClubUserFactory) -> None:
    guide = club_user_factory(is_guide=True, external_guide_id=7)
    former_guide = club_user_factory(is_guide=False, external_guide_id=8)
    unlinked = club_user_factory(is_guide=True)

    assert guide.guide_id == 7
    assert former_guide.guide_id is None
    assert unlinked.guide_id is None


def test_guides_queryset(club_user_factory: ClubUserFactory) -> None:
    guide = club_user_factory(is_guide=True, external_guide_id=7)
    club_user_factory(is_guide=True)
    club_user_factory(external_guide_id=9)

    assert list(ClubUser.objects.get_queryset().guides()) == [guide]


def test_with_email_is_case_insensitive(club_user_factory: ClubUserFactory) -> None:
    user = club_user_factory(email="Mia.Member@ridersclub.org")

    assert ClubUser.objects.get_queryset().with_email(" mia.member@RIDERSCLUB.org").get() == user


def test_display_name(club_user_factory: ClubUserFactory) -> None:
    named = club_user_factory(first_name="Mia", last_name="Member")
    unnamed = club_user_factory(username="fast_rider.42", first_name="", last_name="")

    assert named.display_name == "Mia Member"
    assert unnamed.display_name == "Fast Rider 42"


def test_defaults(club_user_factory: ClubUserFactory) -> None:
    user = club_user_factory()

    assert user.is_member is False
    assert user.is_guide is False
    assert user.language == "en"
