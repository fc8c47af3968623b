from datetime import date

from utils import build_endpoint, encode_handles, load_users, round_half_up, shift_months


def test_load_users(tmp_path):
    users = tmp_path / "users.txt"
    users.write_text("Gennady Korotkevich, tourist\n\nPetr Mitrichev,Petr\n")
    names, handles = load_users(str(users))
    assert names == ["Gennady Korotkevich", "Petr Mitrichev"]
    assert handles == ["tourist", "Petr"]


def test_build_endpoint_drops_missing_params():
    assert build_endpoint("contest.list") == "contest.list"
    assert build_endpoint("user.status", handle="tourist", count=None) == "user.status?handle=tourist"


def test_encode_handles():
    assert encode_handles(["tourist", " Petr "]) == "tourist;Petr"
    assert encode_handles(["a;b"]) == "a%3Bb"


def test_shift_months_clamps_day():
    assert shift_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
    assert shift_months(date(2024, 2, 29), -12) == date(2023, 2, 28)
    assert shift_months(date(2024, 1, 15), -1) == date(2023, 12, 15)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
