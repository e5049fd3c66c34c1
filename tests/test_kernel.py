import io
import time

from stratos.kernel import STRATOS_VERSION, SimKernel, main


def run_until(kernel, output, text, seconds=5.0):
    deadline = time.monotonic() + seconds
    kernel.run(lambda: text in output.getvalue() or time.monotonic() >= deadline)


def test_init_sets_up_modules():
    output = io.StringIO()
    kernel = SimKernel(output)
    kernel.init()
    try:
        assert kernel.cpu_initialized is True
        assert kernel.uart_initialized is True
        assert kernel.irqs_enabled is True
        assert kernel.scheduler.initialized is True
        assert kernel.scheduler.registered_count == 2
        assert [task.id for task in kernel.tasks] == [0, 1]
    finally:
        kernel.run(lambda: True)


def test_banner_is_printed_first():
    output = io.StringIO()
    kernel = SimKernel(output)
    kernel.init()
    kernel.run(lambda: True)
    assert output.getvalue() == (
        "\nKernel initialized\n\rExecuting in EL0\n" + "Version " + STRATOS_VERSION
    )
    assert STRATOS_VERSION == "0.1"


def test_tty_task_runs():
    output = io.StringIO()
    kernel = SimKernel(output)
    kernel.init()
    run_until(kernel, output, "TTY task is alive...")
    assert "\nTTY task is alive...\n" in output.getvalue()
    assert kernel.timer.running is False


def test_main_runs_for_given_time(capsys):
    assert main(["--seconds", "0"]) == 0
    out = capsys.readouterr().out
    assert "Kernel initialized" in out
    assert "Version 0.1" in out