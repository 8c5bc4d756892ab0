"""Command line behaviour, driven through execute_command."""
from unittest.mock import patch

from fifteen_minutes.commands import execute_command
from fifteen_minutes.schemas.command import CommandContext
from fifteen_minutes.store import EntityStore


def _setup_project(terminal, *features):
    terminal.run("new project Alpha")
    for name in features:
        terminal.run(f"new feature {name}")


# Dispatcher

def test_blank_input_is_a_silent_noop(terminal):
    result = terminal.run("   ")
    assert result.success is False
    assert result.message == ""
    assert result.data is None


def test_unknown_command(terminal):
    result = terminal.run("foobar")
    assert result.success is False
    assert result.message == "Command not found: foobar. Type 'help' for available commands."


def test_command_names_are_case_insensitive(terminal):
    assert terminal.run("HELP").success is True


def test_handler_errors_become_failed_results(store):
    with patch.object(store, "list_projects", side_effect=RuntimeError("database is gone")):
        result = execute_command("projects", CommandContext(), store)

    assert result.success is False
    assert result.message == "Error executing command: database is gone"


# Projects

def test_new_project_then_duplicate(terminal):
    result = terminal.run("new project Alpha")
    assert result.success is True
    assert result.data["project"]["name"] == "Alpha"
    assert result.data["project"]["tasks_completed"] == 0

    again = terminal.run("new project alpha")
    assert again.success is False
    assert "already exists" in again.message


def test_new_project_requires_a_name(terminal):
    result = terminal.run("new project")
    assert result.success is False
    assert result.message == "Project name is required"


def test_new_project_with_multi_word_name(terminal):
    result = terminal.run("new project   Side   Quest ")
    assert result.data["project"]["name"] == "Side Quest"


def test_new_without_a_known_kind_shows_usage(terminal):
    assert terminal.run("new").message.startswith("Usage: new project")
    assert terminal.run("new thing x").message.startswith("Usage: new project")


def test_switch_matches_names_case_insensitively(terminal):
    alpha = terminal.run("new project Alpha").data["project"]
    terminal.run("new project Beta")

    result = terminal.run("switch ALPHA")
    assert result.success is True
    assert result.data["project"]["id"] == alpha["id"]
    assert terminal.context.current_project_id == alpha["id"]


def test_non_ascii_names_match_case_insensitively(terminal):
    created = terminal.run("new project Ärger").data["project"]

    again = terminal.run("new project Ärger")
    assert again.success is False
    assert "already exists" in again.message
    assert terminal.run("new project äRGER").success is False

    switched = terminal.run("switch ärger")
    assert switched.success is True
    assert switched.data["project"]["id"] == created["id"]

    terminal.run("new feature Übersicht")
    duplicate = terminal.run("new feature übersicht")
    assert duplicate.success is False


def test_switch_to_missing_project(terminal):
    result = terminal.run("switch Nowhere")
    assert result.success is False
    assert result.message == 'Project "Nowhere" not found'
    assert terminal.run("switch").message == "Usage: switch [project name]"


def test_projects_lists_newest_first(terminal):
    assert terminal.run("projects").message.startswith("No projects yet")

    terminal.run("new project Alpha")
    terminal.run("new project Beta")
    result = terminal.run("projects")

    assert result.success is True
    assert [p["name"] for p in result.data["projects"]] == ["Beta", "Alpha"]
    assert "[1] Beta (0 tasks completed)" in result.message
    assert "[2] Alpha (0 tasks completed)" in result.message


def test_projects_are_scoped_to_their_owner(db, store, other_user):
    store.create_project("Mine")
    theirs = EntityStore(db, other_user.id)

    result = execute_command("projects", CommandContext(), theirs)
    assert result.data is None
    assert result.message.startswith("No projects yet")
    assert execute_command("new project Mine", CommandContext(), theirs).success is True


# Features

def test_feature_commands_need_an_active_project(terminal):
    for line in ("new feature Backend", "features", "add task x 1", "tasks"):
        result = terminal.run(line)
        assert result.success is False
        assert result.message.startswith("No active project")


def test_active_project_of_another_user_is_not_active(db, store, other_user):
    project = store.create_project("Mine")
    theirs = EntityStore(db, other_user.id)
    result = execute_command("features", CommandContext(current_project_id=project.id), theirs)
    assert result.success is False


def test_new_feature_reports_its_ordinal(terminal):
    _setup_project(terminal)

    first = terminal.run("new feature Backend")
    second = terminal.run("new feature Front End")

    assert first.message == "Created feature #1: Backend"
    assert second.message == "Created feature #2: Front End"
    assert second.data["feature"]["project_id"] == terminal.context.current_project_id


def test_new_feature_rejects_duplicates_within_project(terminal):
    _setup_project(terminal, "Backend")

    result = terminal.run("new feature backend")
    assert result.success is False
    assert result.message == 'Feature "backend" already exists in this project'

    terminal.run("new project Beta")
    assert terminal.run("new feature Backend").success is True


def test_new_feature_requires_a_name(terminal):
    _setup_project(terminal)
    assert terminal.run("new feature").message == "Feature name is required"


def test_features_lists_in_creation_order(terminal):
    _setup_project(terminal)
    assert terminal.run("features").message.startswith("No features yet")

    terminal.run("new feature Backend")
    terminal.run("new feature Frontend")
    result = terminal.run("features")

    assert result.message == "Your features:\n[1] Backend\n[2] Frontend"
    assert [f["name"] for f in result.data["features"]] == ["Backend", "Frontend"]


# Tasks

def test_add_task_to_missing_feature(terminal):
    _setup_project(terminal)

    result = terminal.run('add task "write docs" 1')
    assert result.success is False
    assert result.message.startswith("Feature #1 not found")


def test_add_task_reports_address_and_duration(terminal):
    _setup_project(terminal, "Backend")

    result = terminal.run('add task "design schema" 1')
    assert result.success is True
    assert "(1.1)" in result.message
    assert "[15min]" in result.message
    assert result.data["task"]["description"] == '"design schema"'
    assert result.data["task"]["completed_at"] is None

    second = terminal.run("add task wire the api 1")
    assert second.message == "Added task: wire the api (1.2) [15min]"


def test_add_task_long_flag_anywhere(terminal):
    _setup_project(terminal, "Backend")

    result = terminal.run("add task --30 deep work 1")
    assert result.success is True
    assert result.data["task"]["duration"] == 30
    assert result.data["task"]["description"] == "deep work"
    assert result.message.endswith("[30min]")

    trailing = terminal.run("add task more deep work 1 --30")
    assert trailing.data["task"]["duration"] == 30


def test_add_task_validation(terminal):
    _setup_project(terminal, "Backend")

    assert terminal.run("add task 1").message.startswith("Usage: add task")
    assert terminal.run("add task write it").message == "Feature ID must be a positive number"
    assert terminal.run("add task write it 0").message == "Feature ID must be a positive number"
    assert terminal.run("add chore x 1").message.startswith("Usage: add task")
    assert terminal.run("add").message.startswith("Usage: add task")


def test_tasks_with_no_features_suggests_new_feature(terminal):
    _setup_project(terminal)

    result = terminal.run("tasks")
    assert result.success is True
    assert "new feature" in result.message


def test_tasks_with_no_pending_tasks_suggests_add_task(terminal):
    _setup_project(terminal, "Backend")

    result = terminal.run("tasks")
    assert result.success is True
    assert "add task" in result.message
    assert "new feature" not in result.message


def test_tasks_groups_pending_tasks_by_feature(terminal):
    _setup_project(terminal, "Backend", "Frontend", "Docs")
    terminal.run("add task schema 1")
    terminal.run("add task endpoints 1")
    terminal.run("add task readme 3")

    result = terminal.run("tasks")

    assert result.message == (
        "Pending tasks:\n"
        "[1] Backend\n"
        "  [1.1] schema [15min]\n"
        "  [1.2] endpoints [15min]\n"
        "\n"
        "[2] Frontend (no tasks)\n"
        "\n"
        "[3] Docs\n"
        "  [3.1] readme [15min]"
    )
    assert [t["address"] for t in result.data["tasks"]] == ["1.1", "1.2", "3.1"]
    assert len(result.data["features"]) == 3


def test_complete_task_celebrates_and_bumps_counters(terminal, store):
    _setup_project(terminal, "Backend")
    terminal.run('add task "design schema" 1')

    result = terminal.run("complete 1.1")

    assert result.success is True
    assert result.data["celebrate"] is True
    assert result.data["task"]["completed_at"] is not None
    assert result.data["task"]["completed_date"] == result.data["task"]["completed_at"][:10]

    project = store.get_project(terminal.context.current_project_id)
    feature = store.list_features(project.id)[0]
    assert feature.name == "Backend"
    assert feature.tasks_completed == 1
    assert project.tasks_completed == 1


def test_completing_the_same_address_twice(terminal):
    _setup_project(terminal, "Backend")
    terminal.run("add task only one 1")

    assert terminal.run("complete 1.1").success is True

    again = terminal.run("complete 1.1")
    assert again.success is False
    assert again.message == "Task 1.1 not found"


def test_completed_tasks_drop_out_of_the_addressing(terminal):
    _setup_project(terminal, "Backend")
    terminal.run("add task first 1")
    terminal.run("add task second 1")

    terminal.run("complete 1.1")
    result = terminal.run("complete 1.1")

    assert result.success is True
    assert result.data["task"]["description"] == "second"


def test_complete_validation(terminal):
    _setup_project(terminal, "Backend")
    terminal.run("add task first 1")

    assert terminal.run("complete").message.startswith("Usage: complete")
    assert terminal.run("complete 1.1 1.2").message.startswith("Usage: complete")
    assert terminal.run("complete 1").message.startswith("Invalid task number")
    assert terminal.run("complete 1.x").message.startswith("Invalid task number")
    assert terminal.run("complete 1.²").message.startswith("Invalid task number")
    assert terminal.run("complete ٣.1").message.startswith("Invalid task number")
    assert terminal.run("complete 2.1").message == "Feature #2 not found"
    assert terminal.run("complete 1.2").message == "Task 1.2 not found"

    empty = CommandContext()
    assert execute_command("complete 1.1", empty, terminal.store).message == "No active project."


def test_uncomplete_reopens_a_completed_task(terminal, store):
    _setup_project(terminal, "Backend")
    terminal.run("add task first 1")
    terminal.run("complete 1.1")

    result = terminal.run("uncomplete 1.1")

    assert result.success is True
    assert result.data["task"]["completed_at"] is None
    assert result.data["task"]["completed_date"] is None
    assert terminal.run("uncomplete 1.1").message == "Completed task 1.1 not found"
    assert terminal.run("tasks").data["tasks"][0]["description"] == "first"


def test_ordinals_ignore_unrelated_entities(terminal):
    _setup_project(terminal, "Backend", "Frontend")
    terminal.run("add task schema 1")
    terminal.run("add task layout 2")

    before = [t["address"] + t["description"] for t in terminal.run("tasks").data["tasks"]]

    terminal.run("new project Beta")
    terminal.run("new feature Other")
    terminal.run("add task elsewhere 1")
    terminal.run("switch Alpha")
    terminal.run("add task styling 2")

    after = [t["address"] + t["description"] for t in terminal.run("tasks").data["tasks"]]
    assert after[:2] == before
    assert after[2] == "2.2styling"


# Stats, help, clear

def test_stats_sums_real_durations(terminal):
    _setup_project(terminal, "Backend")
    terminal.run("add task short 1")
    terminal.run("add task long 1 --30")
    terminal.run("add task pending 1")
    terminal.run("complete 1.1")
    terminal.run("complete 1.1")

    result = terminal.run("stats")

    assert result.success is True
    assert result.data == {"total_tasks": 2, "total_projects": 1, "total_minutes": 45}
    assert "Total Time Invested: 0h 45m" in result.message
    assert "Jelly Beans Earned: 2" in result.message


def test_help_lists_commands(terminal):
    result = terminal.run("help")
    assert result.success is True
    for command in ("new project", "switch", "add task", "complete", "uncomplete", "stats", "clear"):
        assert command in result.message


def test_clear_is_idempotent(terminal):
    first = terminal.run("clear")
    terminal.run("new project Alpha")
    second = terminal.run("clear")

    assert first == second
    assert first.success is True
    assert first.message == ""
    assert first.data == {"clear": True}


# Streaks and sharing

def test_streaks(terminal):
    assert terminal.run("streak").message.startswith("No streaks yet")

    started = terminal.run("streak with @sam")
    assert started.success is True
    assert started.message == "Started tracking streak with @sam"
    assert started.data["streak"]["current_streak"] == 0

    listed = terminal.run("streak")
    assert listed.message == "Your streaks:\n@sam: 0 days (longest: 0)"
    assert terminal.run("streak with sam").message.startswith("Usage: streak")
    assert terminal.run("streak with @").message.startswith("Usage: streak")


def test_streaks_do_not_advance_on_completion(terminal):
    _setup_project(terminal, "Backend")
    terminal.run("streak with @sam")
    terminal.run("add task first 1")
    terminal.run("complete 1.1")

    assert terminal.run("streak").data["streaks"][0]["current_streak"] == 0


def test_share_uses_feature_task_addressing(terminal, store):
    _setup_project(terminal, "Backend", "Frontend")
    terminal.run("add task schema 1")
    terminal.run("add task layout 2")

    result = terminal.run("share 2.1 with @sam")

    assert result.success is True
    assert result.message == 'Shared "layout" with @sam'
    assert result.data["shared_task"]["shared_with"] == "sam"
    assert [s.task_description for s in store.list_shared_tasks()] == ["layout"]


def test_share_validation(terminal):
    assert terminal.run("share 1.1 with @sam").message == "No active project."

    _setup_project(terminal, "Backend")
    assert terminal.run("share 1.1 to @sam").message.startswith("Usage: share")
    assert terminal.run("share 1.1 with sam").message.startswith("Usage: share")
    assert terminal.run("share 1.1 with @sam").message == "Task 1.1 not found"
