import logging

import pytest

from library_catalog import main, build_parser, logger


@pytest.fixture(autouse=True)
def restore_log_level():
    """main() sets the catalog logger level; put it back after each test."""
    level = logger.level
    yield
    logger.setLevel(level)


def test_demo_prints_scripted_sequence(capsys):
    main([])
    out = capsys.readouterr().out

    assert out.splitlines() == [
        "Book checked out successfully",
        "",
        "Searching for 'Rust' books:",
        "Book: The Rust Programming Language by Steve Klabnik (ISBN: 978-1593278281) - Checked Out",
        "Book: Zero To Production In Rust by Luca Palmieri (ISBN: 978-3001234567) - Available",
        "",
        "John Doe's borrowed books:",
        "Book: The Rust Programming Language by Steve Klabnik (ISBN: 978-1593278281) - Checked Out",
        "",
        "Book returned successfully",
    ]


def test_demo_custom_search_query(capsys):
    main(["--search", "palmieri"])
    out = capsys.readouterr().out

    assert "Searching for 'palmieri' books:" in out
    assert "Zero To Production In Rust" in out
    assert "Searching for 'palmieri' books:\nBook: The Rust" not in out


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.search == "Rust"
    assert args.log_level == "WARNING"


def test_log_level_flag_sets_logger_level():
    main(["--log-level", "debug"])
    assert logger.level == logging.DEBUG


@pytest.mark.parametrize("bad_level", ["inf", "basic_format", ""])
def test_invalid_log_level_exits_with_usage_error(bad_level, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--log-level", bad_level])
    assert exc.value.code == 2
    assert "invalid choice" in capsys.readouterr().err
