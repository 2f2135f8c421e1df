import logging
import os
import tempfile

from romdb.monitor import setup_monitoring, log_event, tail_events, LOGGER_NAME


def test_monitor_writes_event_to_file():
    with tempfile.TemporaryDirectory() as tmp:
        logfile = os.path.join(tmp, 'events.log')

        logger = setup_monitoring(log_file=logfile, echo=False)

        log_event('test.event', 'monitor alive')

        for h in logger.handlers:
            h.flush()

        with open(logfile, 'r', encoding='utf-8') as f:
            content = f.read()

        assert 'test.event' in content
        assert 'monitor alive' in content

        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()


def test_child_loggers_reach_the_event_log(tmp_path):
    logfile = tmp_path / 'events.log'
    logger = setup_monitoring(log_file=str(logfile))

    logging.getLogger(LOGGER_NAME + '.resolver').error('corrupt entry')
    for h in logger.handlers:
        h.flush()

    assert 'ERROR | romdb.resolver | corrupt entry' in logfile.read_text(encoding='utf-8')


def test_setup_twice_replaces_handlers(tmp_path):
    setup_monitoring(log_file=str(tmp_path / 'a.log'), echo=True)
    logger = setup_monitoring(log_file=str(tmp_path / 'b.log'))

    assert len(logger.handlers) == 1
    assert logger.handlers[0].baseFilename.endswith('b.log')


def test_tail_events(tmp_path, capsys):
    logfile = tmp_path / 'events.log'
    logfile.write_text(''.join(f'line {i}\n' for i in range(10)), encoding='utf-8')

    printed = tail_events(str(logfile), lines=3)

    assert printed == 3
    assert capsys.readouterr().out.splitlines() == ['line 7', 'line 8', 'line 9']


def test_tail_events_missing_file(tmp_path, capsys):
    assert tail_events(str(tmp_path / 'none.log')) == 0
    assert 'No event log' in capsys.readouterr().out
