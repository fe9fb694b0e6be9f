from gitform.models import ResultReport

EMPTY_REPORT = "[fail] -\n\nRESULT:\n\tNo result\n\nADDITIONAL INFO:\n\t-\n\n"


def test_initialisation():
    report = ResultReport()
    assert report.objective == "-"
    assert report.successful is False
    assert report.results == set()
    assert report.additional_info == {}

    report = ResultReport("A")
    assert report.objective == "A"
    assert report.successful is False


def test_render_empty_report():
    assert ResultReport().render() == EMPTY_REPORT
    assert str(ResultReport()) == EMPTY_REPORT


def test_render_results_sorted():
    report = ResultReport("Load")
    report.successful = True
    for line in ["C", "A", "B"]:
        report.append_result(line)

    assert report.render() == "[done] Load\n\nRESULT:\n\tA\n\tB\n\tC\n\nADDITIONAL INFO:\n\t-\n\n"


def test_render_additional_info_sorted_by_category_and_line():
    report = ResultReport("Save")
    report.append_additional_info("Zero", "B")
    report.append_additional_info("One", "C")
    report.append_additional_info("Zero", "A")

    expected = (
        "[fail] Save\n\nRESULT:\n\tNo result\n\nADDITIONAL INFO:\n"
        "One:\n\tC\n\n"
        "Zero:\n\tA\n\tB\n\n"
    )
    assert report.render() == expected


def test_append_is_idempotent():
    report = ResultReport()
    report.append_result("A")
    report.append_result("A")
    report.append_additional_info("C", "D")
    report.append_additional_info("C", "D")

    assert report.render().count("\tA\n") == 1
    assert report.render().count("\tD\n") == 1


def test_append_order_does_not_change_output():
    items = [("x", "1"), ("y", "2"), ("x", "3"), ("z", "4")]
    first, second = ResultReport("O"), ResultReport("O")

    for category, line in items:
        first.append_result(line)
        first.append_additional_info(category, line)
    for category, line in reversed(items):
        second.append_additional_info(category, line)
        second.append_result(line)

    assert first.render() == second.render()


def test_clear():
    report = ResultReport("A")
    report.successful = True
    report.append_result("B")
    report.append_additional_info("C", "D")
    assert report.render() == "[done] A\n\nRESULT:\n\tB\n\nADDITIONAL INFO:\nC:\n\tD\n\n"

    report.clear()
    assert report.render() == EMPTY_REPORT
