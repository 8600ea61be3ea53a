"""Tests for airdefense CLI commands."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from app.cli import app
from app.models.base import RuleOperatorEnum
from app.models.operator import Operator

from tests.factories import make_missile, make_rule, make_station


runner = CliRunner()


# ---------------------------------------------------------------------------
# start
# ---------------------------------------------------------------------------


@patch("app.cli._print_next_steps")
@patch("scripts.seed_defaults.seed_defaults",
       return_value={"radar_stations": 3, "classification_rules": 4, "missiles": 8})
@patch("scripts.seed_defaults.load_defaults", return_value={})
@patch("app.cli._is_first_run", return_value=True)
@patch("app.database.SessionLocal")
@patch("app.database.init_db")
def test_start_first_run(mock_init, mock_sl, mock_first_run, mock_load, mock_seed, mock_next):
    """start creates tables, seeds defaults and commits."""
    mock_db = MagicMock()
    mock_sl.return_value = mock_db

    result = runner.invoke(app, ["start"])

    assert result.exit_code == 0
    mock_init.assert_called_once()
    mock_seed.assert_called_once_with(mock_db, {})
    mock_db.commit.assert_called_once()
    assert "Setup complete" in result.output
    assert "Missiles: 8" in result.output


@patch("scripts.seed_defaults.load_defaults", return_value={})
@patch("app.cli._is_first_run", return_value=True)
@patch("app.database.SessionLocal")
@patch("app.database.init_db")
def test_start_passes_config_path(mock_init, mock_sl, mock_first_run, mock_load):
    mock_sl.return_value = MagicMock()
    with patch("scripts.seed_defaults.seed_defaults",
               return_value={"radar_stations": 0, "classification_rules": 0, "missiles": 0}):
        result = runner.invoke(app, ["start", "--config", "custom.yaml"])
    assert result.exit_code == 0
    mock_load.assert_called_once_with("custom.yaml")


@patch("app.cli._is_first_run", return_value=False)
def test_start_already_configured(mock_first_run):
    """start when already configured points at status instead."""
    result = runner.invoke(app, ["start"])
    assert result.exit_code == 0
    assert "already set up" in result.output
    assert "status" in result.output


@patch("app.cli._is_first_run", return_value=True)
@patch("app.database.init_db")
def test_start_setup_failure(mock_init, mock_first_run):
    """start handles init_db failure with friendly error."""
    mock_init.side_effect = Exception("database locked")
    result = runner.invoke(app, ["start"])
    assert result.exit_code == 1
    assert "failed" in result.output.lower()


@patch("scripts.seed_defaults.seed_defaults", side_effect=RuntimeError("bad yaml"))
@patch("scripts.seed_defaults.load_defaults", return_value={})
@patch("app.cli._is_first_run", return_value=True)
@patch("app.database.SessionLocal")
@patch("app.database.init_db")
def test_start_seed_failure_rolls_back(mock_init, mock_sl, mock_first_run, mock_load, mock_seed):
    mock_db = MagicMock()
    mock_sl.return_value = mock_db

    result = runner.invoke(app, ["start"])

    assert result.exit_code == 1
    mock_db.rollback.assert_called_once()
    mock_db.commit.assert_not_called()
    mock_db.close.assert_called_once()


# ---------------------------------------------------------------------------
# add-operator
# ---------------------------------------------------------------------------


def test_add_operator_creates_hashed_account(session_factory, db):
    with patch("app.database.SessionLocal", session_factory):
        result = runner.invoke(app, ["add-operator", "watch1"], input="pw123\npw123\n")

    assert result.exit_code == 0
    assert "created" in result.output
    operator = db.query(Operator).filter(Operator.username == "watch1").one()
    assert operator.password_hash != "pw123"
    assert operator.role.value == "Operator"


def test_add_operator_admin_role(session_factory, db):
    with patch("app.database.SessionLocal", session_factory):
        result = runner.invoke(
            app, ["add-operator", "chief", "--role", "Admin"], input="pw123\npw123\n",
        )
    assert result.exit_code == 0
    assert db.query(Operator).one().role.value == "Admin"


def test_add_operator_invalid_role(session_factory):
    with patch("app.database.SessionLocal", session_factory):
        result = runner.invoke(
            app, ["add-operator", "chief", "--role", "General"], input="pw123\npw123\n",
        )
    assert result.exit_code == 1
    assert "Invalid role" in result.output


def test_add_operator_duplicate(session_factory):
    with patch("app.database.SessionLocal", session_factory):
        runner.invoke(app, ["add-operator", "watch1"], input="pw123\npw123\n")
        result = runner.invoke(app, ["add-operator", "watch1"], input="pw123\npw123\n")
    assert result.exit_code == 1
    assert "already exists" in result.output


# ---------------------------------------------------------------------------
# status / rules
# ---------------------------------------------------------------------------


def test_status_empty_database(session_factory):
    with patch("app.database.SessionLocal", session_factory):
        result = runner.invoke(app, ["status"])
    assert result.exit_code == 0
    assert "Database" in result.output
    assert "airdefense start" in result.output


def test_status_counts_inventory(session_factory, db):
    make_station(db)
    make_missile(db, serial="PAT-101")
    db.commit()

    with patch("app.database.SessionLocal", session_factory):
        result = runner.invoke(app, ["status"])

    assert result.exit_code == 0
    assert "1 available" in result.output


@patch("app.database.SessionLocal")
def test_status_database_error(mock_sl):
    mock_db = MagicMock()
    mock_db.query.side_effect = RuntimeError("no such table")
    mock_sl.return_value = mock_db

    result = runner.invoke(app, ["status"])

    assert result.exit_code == 1
    assert "error" in result.output.lower()
    mock_db.close.assert_called_once()


def test_rules_table(session_factory, db):
    make_rule(db, "SPEED_KTS", RuleOperatorEnum.GREATER_THAN.value, "500", "High")
    make_rule(db, "ALTITUDE_FT", RuleOperatorEnum.LESS_THAN.value, "500", "Moderate", enabled=False)
    db.commit()

    with patch("app.database.SessionLocal", session_factory):
        result = runner.invoke(app, ["rules"])

    assert result.exit_code == 0
    assert "SPEED_KTS" in result.output
    assert "Moderate" in result.output


# ---------------------------------------------------------------------------
# open
# ---------------------------------------------------------------------------


@patch("uvicorn.run")
def test_open_runs_uvicorn(mock_run):
    result = runner.invoke(app, ["open", "--port", "5050"])
    assert result.exit_code == 0
    mock_run.assert_called_once_with("app.main:app", host="127.0.0.1", port=5050)


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def test_is_first_run_true_on_empty(session_factory):
    from app.cli import _is_first_run
    with patch("app.database.SessionLocal", session_factory):
        assert _is_first_run() is True


def test_is_first_run_false_with_station(session_factory, db):
    from app.cli import _is_first_run
    make_station(db)
    db.commit()
    with patch("app.database.SessionLocal", session_factory):
        assert _is_first_run() is False
