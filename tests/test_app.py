import unittest
from unittest import mock

from zakkaplan import app
from zakkaplan.errors import AIResponseFormatError, AIServiceError, MissingAPIKeyError


class TestReportAIError(unittest.TestCase):
    def test_format_error_logs_raw_reply(self):
        exc = AIResponseFormatError("bad json", raw_text="Sure! Here you go: Namba, Umeda")
        with mock.patch.object(app, "st") as st, self.assertLogs("zakkaplan.app", level="WARNING") as logs:
            app._report_ai_error(exc)
        st.error.assert_called_once()
        self.assertIn("Sure! Here you go", logs.output[0])

    def test_missing_key_warns(self):
        with mock.patch.object(app, "st") as st:
            app._report_ai_error(MissingAPIKeyError("no key"))
        st.warning.assert_called_once()
        st.error.assert_not_called()

    def test_other_errors(self):
        with mock.patch.object(app, "st") as st:
            app._report_ai_error(AIServiceError("quota exceeded"))
        self.assertIn("quota exceeded", st.error.call_args[0][0])


if __name__ == "__main__":
    unittest.main()
