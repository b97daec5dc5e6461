"""
Tests for the pass-through operations on Facade.

Each operation is checked both ways:
  1. Agent inactive: the primitive is never touched and the documented default
     comes back.
  2. Agent active: the primitive is called once with the (coerced) arguments
     and its result is returned.
"""

import unittest
from unittest.mock import MagicMock

from newrelic_facade import Facade, StaticDetector
from newrelic_facade.primitives import AgentPrimitives

BOOL_RESULT = "bool"
NO_RESULT = "none"
TEXT_RESULT = "text"

# (operation, call args, expected primitive args, result kind)
OPERATIONS = [
    ("add_custom_parameter", ("plan", "gold"), ("plan", "gold"), BOOL_RESULT),
    ("add_custom_tracer", ("app.views:Checkout.post",), ("app.views:Checkout.post",), BOOL_RESULT),
    ("background_job", (), (True,), NO_RESULT),
    ("capture_params", (False,), (False,), NO_RESULT),
    ("custom_metric", ("Custom/render", 12.5), ("Custom/render", 12.5), BOOL_RESULT),
    ("disable_autorum", (), (), NO_RESULT),
    ("end_of_transaction", (), (), NO_RESULT),
    ("end_transaction", (), (False,), NO_RESULT),
    ("get_browser_timing_footer", (), (True,), TEXT_RESULT),
    ("get_browser_timing_header", (False,), (False,), TEXT_RESULT),
    ("ignore_apdex", (), (), NO_RESULT),
    ("ignore_transaction", (), (), NO_RESULT),
    ("name_transaction", ("checkout/confirm",), ("checkout/confirm",), NO_RESULT),
    ("notice_error", ("payment declined",), ("payment declined",), NO_RESULT),
    ("record_custom_event", ("Purchase", {"total": 9.99}), ("Purchase", {"total": 9.99}), NO_RESULT),
    ("set_appname", ("myapp",), ("myapp", None, False), BOOL_RESULT),
    ("set_user_attributes", ("ada", "acme", "pro"), ("ada", "acme", "pro"), BOOL_RESULT),
    ("start_transaction", ("worker",), ("worker", None), BOOL_RESULT),
]

INACTIVE_RESULTS = {BOOL_RESULT: False, NO_RESULT: None, TEXT_RESULT: ""}


def _facade(active: bool) -> Facade:
    return Facade(StaticDetector(active), MagicMock(spec=AgentPrimitives))


class TestOperationsInactive(unittest.TestCase):
    def test_primitive_never_invoked(self):
        for name, args, _, _ in OPERATIONS:
            with self.subTest(operation=name):
                facade = _facade(False)
                getattr(facade, name)(*args)
                self.assertEqual(facade.primitives.mock_calls, [])

    def test_returns_documented_default(self):
        for name, args, _, kind in OPERATIONS:
            with self.subTest(operation=name):
                result = getattr(_facade(False), name)(*args)
                expected = INACTIVE_RESULTS[kind]
                self.assertEqual(result, expected)
                self.assertIs(type(result), type(expected))

    def test_browser_timing_header_is_empty_string(self):
        self.assertEqual(_facade(False).get_browser_timing_header(), "")


class TestOperationsActive(unittest.TestCase):
    def test_primitive_called_once_with_arguments(self):
        for name, args, expected_args, _ in OPERATIONS:
            with self.subTest(operation=name):
                facade = _facade(True)
                getattr(facade, name)(*args)
                primitive = getattr(facade.primitives, name)
                primitive.assert_called_once_with(*expected_args)

    def test_boolean_results_pass_through(self):
        for name, args, _, kind in OPERATIONS:
            if kind != BOOL_RESULT:
                continue
            for value in (True, False):
                with self.subTest(operation=name, value=value):
                    facade = _facade(True)
                    getattr(facade.primitives, name).return_value = value
                    self.assertIs(getattr(facade, name)(*args), value)

    def test_void_operations_return_none(self):
        for name, args, _, kind in OPERATIONS:
            if kind != NO_RESULT:
                continue
            with self.subTest(operation=name):
                facade = _facade(True)
                getattr(facade.primitives, name).return_value = "ignored"
                self.assertIsNone(getattr(facade, name)(*args))

    def test_snippets_returned_as_text(self):
        facade = _facade(True)
        snippet = '<script type="text/javascript">window.NREUM={}</script>'
        facade.primitives.get_browser_timing_header.return_value = snippet
        self.assertEqual(facade.get_browser_timing_header(), snippet)

    def test_snippet_false_becomes_empty_string(self):
        facade = _facade(True)
        facade.primitives.get_browser_timing_footer.return_value = False
        self.assertEqual(facade.get_browser_timing_footer(), "")

    def test_set_appname_forwards_none_license(self):
        facade = _facade(True)
        facade.primitives.set_appname.return_value = True
        self.assertIs(facade.set_appname("myapp", None, False), True)
        facade.primitives.set_appname.assert_called_once_with("myapp", None, False)

    def test_start_transaction_forwards_license(self):
        facade = _facade(True)
        facade.start_transaction("worker", "license-key")
        facade.primitives.start_transaction.assert_called_once_with("worker", "license-key")

    def test_end_transaction_ignore(self):
        facade = _facade(True)
        facade.end_transaction(ignore=True)
        facade.primitives.end_transaction.assert_called_once_with(True)

    def test_notice_error_forwards_exception_object(self):
        facade = _facade(True)
        error = KeyError("sku")
        facade.notice_error(error)
        facade.primitives.notice_error.assert_called_once_with(error)

    def test_downstream_failure_propagates(self):
        facade = _facade(True)
        facade.primitives.custom_metric.side_effect = RuntimeError("harvest failed")
        with self.assertRaises(RuntimeError):
            facade.custom_metric("Custom/render", 1.0)


class TestArgumentCoercion(unittest.TestCase):
    def test_custom_metric_value_becomes_float(self):
        facade = _facade(True)
        facade.custom_metric("Custom/render", 12)
        args = facade.primitives.custom_metric.call_args[0]
        self.assertIsInstance(args[1], float)
        self.assertEqual(args[1], 12.0)

    def test_flags_become_bool(self):
        facade = _facade(True)
        facade.background_job(0)
        facade.capture_params(1)
        facade.get_browser_timing_header(include_tags="")
        facade.primitives.background_job.assert_called_once_with(False)
        facade.primitives.capture_params.assert_called_once_with(True)
        facade.primitives.get_browser_timing_header.assert_called_once_with(False)

    def test_names_become_str(self):
        facade = _facade(True)
        facade.name_transaction(404)
        facade.add_custom_parameter(7, 7)
        facade.primitives.name_transaction.assert_called_once_with("404")
        facade.primitives.add_custom_parameter.assert_called_once_with("7", 7)

    def test_custom_event_attributes_copied_to_dict(self):
        facade = _facade(True)
        attributes = (("sku", "A-1"), ("qty", 2))
        facade.record_custom_event("Purchase", dict(attributes))
        name, forwarded = facade.primitives.record_custom_event.call_args[0]
        self.assertEqual(name, "Purchase")
        self.assertEqual(forwarded, {"sku": "A-1", "qty": 2})

    def test_invalid_metric_value_raises_before_dispatch(self):
        facade = _facade(False)
        with self.assertRaises(ValueError):
            facade.custom_metric("Custom/render", "fast")


class TestOperationsAreIndependent(unittest.TestCase):
    def test_set_user_attributes_does_not_touch_custom_parameter(self):
        facade = _facade(True)
        facade.set_user_attributes("ada", "acme", "pro")
        facade.primitives.add_custom_parameter.assert_not_called()


if __name__ == "__main__":
    unittest.main()
