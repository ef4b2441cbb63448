import pytest

from metrics import MetricsCollector, PolicyResult


def test_policy_result_average():
    res = PolicyResult('Softmax', 300.0, 10)
    assert res.average_latency == 30.0
    assert PolicyResult('Random', 0.0, 0).average_latency == 0.0


def test_record_accumulates_per_policy():
    collector = MetricsCollector()
    collector.record_latency('Softmax', 0, 10.0)
    collector.record_latency('Softmax', 1, 20.0)
    collector.record_latency('Random', 1, 50.0)

    results = {r.name: r for r in collector.results()}
    assert results['Softmax'] == PolicyResult('Softmax', 30.0, 2)
    assert results['Random'] == PolicyResult('Random', 50.0, 1)
    assert collector.selections['Softmax'] == {0: 1, 1: 1}


def test_results_keep_first_seen_order():
    collector = MetricsCollector()
    for name in ('Softmax', 'Round-Robin', 'Random'):
        collector.record_latency(name, 0, 1.0)
    assert [r.name for r in collector.results()] == ['Softmax', 'Round-Robin', 'Random']


def test_report_fills_final_report(capsys):
    collector = MetricsCollector()
    for i, latency in enumerate([10.0, 20.0, 30.0, 40.0]):
        collector.record_latency('Round-Robin', i % 2, latency)

    collector.report()
    out = capsys.readouterr().out

    assert "Round-Robin     | Avg Latency: 25.00 ms | Total: 100 ms" in out
    data = collector.final_report['Round-Robin']
    assert data['avg'] == 25.0
    assert data['total'] == 100.0
    assert data['steps'] == 4
    assert data['p50'] == pytest.approx(25.0)
    assert data['share'] == {0: 0.5, 1: 0.5}


def test_reset_keeps_final_report():
    collector = MetricsCollector()
    collector.record_latency('Random', 0, 5.0)
    collector.report()
    collector.reset()
    assert collector.results() == []
    assert 'Random' in collector.final_report


def test_log_metrics_prints_running_average(capsys):
    collector = MetricsCollector()
    collector.record_latency('Softmax', 0, 12.0)
    collector.record_latency('Softmax', 0, 14.0)
    collector.log_metrics(2)
    out = capsys.readouterr().out
    assert "[SOFTMAX] t=2 | avg=13.00ms | total=26ms" in out
