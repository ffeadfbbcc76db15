import os

import pytest
from conftest import FakePortChecker

from regtest.errors import RegtestError
from regtest.lifecycle import Lifecycle

GENERATE_OUTPUT = '{"address": "bcrt1qminer", "blocks": []}'


def healthy_stack(runner):
    """Script a compose stack that comes up cleanly."""
    runner.on("config", "--services", stdout="bitcoind\nelectrs\nproxy\n")
    runner.on("logs", "bitcoind", stdout="init message: Loading wallet...\nBound to 0.0.0.0:18444\n")
    runner.on("logs", "electrs", stdout="INFO electrs::db] finished full compaction\n")
    runner.on("listwallets", stdout="[]")
    runner.on("-generate", stdout=GENERATE_OUTPUT)
    return runner


def test_start_runs_steps_in_order(runner, config):
    healthy_stack(runner)
    ports = FakePortChecker()
    Lifecycle(config, runner, ports).start()

    order = [
        runner.index_of("down", "--remove-orphans"),
        runner.index_of("config", "--services"),
        runner.index_of("up", "-d"),
        runner.index_of("logs", "bitcoind"),
        runner.index_of("getblockchaininfo"),
        runner.index_of("listwallets"),
        runner.index_of("createwallet", "miner"),
        runner.index_of("getwalletinfo"),
        runner.index_of("-generate"),
        runner.index_of("logs", "electrs"),
    ]
    assert order == sorted(order)
    assert ports.checked == [3000, 50001]
    assert runner.called("-rpcwallet=miner", "-generate")[0][-1] == "103"


def test_start_leaves_clean_data_dirs(runner, config, tmp_path):
    stale = tmp_path / "dataldk1" / "old.db"
    stale.parent.mkdir()
    stale.write_text("left over from a crashed run")

    healthy_stack(runner)
    Lifecycle(config, runner, FakePortChecker()).start()

    for path in config.data_dir_paths():
        assert os.path.isdir(path)
        assert os.listdir(path) == []


def test_port_conflict_aborts_before_up(runner, config):
    healthy_stack(runner)
    with pytest.raises(RegtestError, match="Port 50001 is already in use"):
        Lifecycle(config, runner, FakePortChecker({50001})).start()
    assert not runner.called("up", "-d")


def test_unknown_service_aborts_before_up(runner, config):
    runner.on("config", "--services", stdout="bitcoind\nelectrs\n")
    with pytest.raises(RegtestError, match="proxy"):
        Lifecycle(config, runner, FakePortChecker()).start()
    assert not runner.called("up", "-d")


def test_core_readiness_timeout_is_fatal(runner, config):
    runner.on("config", "--services", stdout="bitcoind\nelectrs\nproxy\n")
    runner.on("logs", "bitcoind", stdout="Bitcoin Core starting\n")

    with pytest.raises(RegtestError, match="bitcoind did not become ready in time"):
        Lifecycle(config, runner, FakePortChecker()).start()
    assert len(runner.called("logs", "bitcoind")) == config.max_attempts
    assert not runner.called("listwallets")


def test_rpc_readiness_is_a_separate_gate(runner, config):
    runner.on("getblockchaininfo", returncode=1, stderr="error: couldn't connect to server")
    healthy_stack(runner)

    with pytest.raises(RegtestError, match="RPC did not become ready"):
        Lifecycle(config, runner, FakePortChecker()).start()
    assert not runner.called("listwallets")


def test_indexer_readiness_timeout_is_fatal(runner, config):
    runner.on("logs", "electrs", stdout="INFO electrs::db] starting compaction\n")
    healthy_stack(runner)

    with pytest.raises(RegtestError, match="electrs did not become ready"):
        Lifecycle(config, runner, FakePortChecker()).start()
    assert runner.called("-generate")


def test_up_failure_is_fatal(runner, config):
    runner.on("config", "--services", stdout="bitcoind\nelectrs\nproxy\n")
    runner.on("up", "-d", returncode=1, stderr="Cannot connect to the Docker daemon")

    with pytest.raises(RegtestError, match="Docker daemon"):
        Lifecycle(config, runner, FakePortChecker()).start()
    assert not runner.called("logs")


def test_stop_when_nothing_is_running(runner, config):
    Lifecycle(config, runner, FakePortChecker()).stop()

    assert runner.called("down", "--remove-orphans")
    for path in config.data_dir_paths():
        assert not os.path.exists(path)


def test_stop_removes_data_dirs(runner, config):
    for path in config.data_dir_paths():
        os.makedirs(os.path.join(path, "blocks"))

    Lifecycle(config, runner, FakePortChecker()).stop()
    for path in config.data_dir_paths():
        assert not os.path.exists(path)


def test_check_compose(runner, config):
    lifecycle = Lifecycle(config, runner, FakePortChecker())
    lifecycle.check_compose()

    runner.on("version", returncode=127)
    with pytest.raises(RegtestError, match="Could not call docker compose"):
        lifecycle.check_compose()