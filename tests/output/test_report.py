from tallytest.engine.tally import FAILED, PASSED, SuiteResult, Tally
from tallytest.output.channels import OutputSink
from tallytest.output.report import BANNER, RULE, format_report, log_test_results, results_frame


def make_result(description, tests=(0, 0), assertions=(0, 0)):
    tally = Tally()
    for kind, (passed, failed) in (("tests", tests), ("assertions", assertions)):
        for _ in range(passed):
            tally.increment(kind, PASSED)
        for _ in range(failed):
            tally.increment(kind, FAILED)
    return SuiteResult(description=description, tallies=tally)


def test_results_frame_has_one_row_per_suite():
    frame = results_frame([make_result("cart", (2, 1), (5, 1)), make_result("clock", (1, 0), (1, 0))])

    assert list(frame["description"]) == ["cart", "clock"]
    assert frame["tests_passed"].sum() == 3
    assert frame["assertions_failed"].tolist() == [1, 0]


def test_report_block_for_one_suite():
    blocks = format_report([make_result("cart", (2, 1), (5, 1))])

    assert blocks[0] == f"\n\n{BANNER}"
    assert blocks[1] == (
        "\n===== cart =====\n"
        "\n"
        "3 TESTS FINISHED\n"
        "\n"
        "*\n"
        "* 5 Assertions Passed\n"
        "* 1 Assertions Failed\n"
        "*\n"
        "* 2 Tests Passed\n"
        "* 1 Tests Failed\n"
        "*\n"
    )
    assert blocks[2] == "\nTOTAL: Passed: 2, Failed: 1"
    assert blocks[3] == f"\n{RULE}\n\n"


def test_total_sums_every_suite_in_order():
    blocks = format_report([make_result("first", (1, 1)), make_result("second", (3, 0))])

    assert "===== first =====" in blocks[1]
    assert "===== second =====" in blocks[2]
    assert blocks[3] == "\nTOTAL: Passed: 4, Failed: 1"


def test_empty_run_reports_zero_totals():
    assert format_report([]) == [f"\n\n{BANNER}", "\nTOTAL: Passed: 0, Failed: 0", f"\n{RULE}\n\n"]


def test_log_test_results_writes_to_result_channel(channel_output):
    log_test_results([make_result("cart", (1, 0))], OutputSink())

    assert channel_output("result")[-2] == "\nTOTAL: Passed: 1, Failed: 0"


def test_log_test_results_respects_muting(channel_output):
    log_test_results([make_result("cart", (1, 0))], OutputSink({"result"}))

    assert channel_output("result") == []
