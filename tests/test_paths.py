import time

import pytest

from mddkit.paths import last_file_name, msleep


@pytest.mark.parametrize(
    "pathname, expected",
    [
        ("/usr/include/omc/c/util.h", "util.h"),
        ("C:\\src\\include\\util.h", "util.h"),
        ("plain.c", "plain.c"),
        ("dir/sub\\file.c", "file.c"),
        ("dir\\sub/file.c", "file.c"),
        ("dir/", ""),
    ],
)
def test_last_file_name(pathname, expected):
    assert last_file_name(pathname) == expected


def test_last_file_name_result_has_no_separator():
    result = last_file_name("a/b\\c/d\\e")
    assert "/" not in result and "\\" not in result
    assert result == "e"


def test_msleep_waits_at_least_requested_time():
    start = time.monotonic()
    result = msleep(30)
    elapsed = time.monotonic() - start
    assert result is None
    assert elapsed >= 0.029


def test_msleep_zero_returns_promptly():
    start = time.monotonic()
    result = msleep(0)
    elapsed = time.monotonic() - start
    assert result is None
    assert elapsed < 1.0


def test_msleep_negative_raises():
    with pytest.raises(ValueError):
        msleep(-1)