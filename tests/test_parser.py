from fifteen_minutes.commands.parser import (
    ParsedCommand,
    parse_command_line,
    parse_ordinal,
    parse_task_address,
    pop_flag,
)


def test_blank_input_parses_to_none():
    assert parse_command_line("") is None
    assert parse_command_line("   \t  ") is None


def test_command_name_is_lower_cased_and_args_split_on_whitespace_runs():
    parsed = parse_command_line("  ADD   task  write\tthe   docs 2 ")
    assert parsed == ParsedCommand("add", ["task", "write", "the", "docs", "2"])


def test_arguments_keep_their_case_and_quotes():
    parsed = parse_command_line('new project "My Thing"')
    assert parsed.args == ["project", '"My', 'Thing"']


def test_parse_ordinal():
    assert parse_ordinal("1") == 1
    assert parse_ordinal("12") == 12
    for token in ("0", "-1", "1.5", "abc", "", "2x"):
        assert parse_ordinal(token) is None


def test_parse_ordinal_rejects_non_ascii_digits():
    for token in ("²", "1²", "٣", "１"):
        assert parse_ordinal(token) is None
    assert parse_task_address("1.²") is None


def test_parse_task_address():
    assert parse_task_address("1.2") == (1, 2)
    assert parse_task_address("10.3") == (10, 3)
    for token in ("1", "1.2.3", "0.1", "1.0", "a.b", ".1", "1.", ""):
        assert parse_task_address(token) is None


def test_pop_flag_removes_every_occurrence():
    found, rest = pop_flag(["--30", "write", "--30", "1"], "--30")
    assert found is True
    assert rest == ["write", "1"]

    found, rest = pop_flag(["write", "1"], "--30")
    assert found is False
    assert rest == ["write", "1"]
