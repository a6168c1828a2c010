import logging
import unittest

from colorama import Fore, Style

from analysis.util.messages import ColorFormatter, RecordingSink, setup_logger


class TestMessages(unittest.TestCase):
    def _record(self, level, msg):
        return logging.LogRecord("aie_ct_writer", level, __file__, 1, msg, None, None)

    def test_plain_format(self):
        fmt = ColorFormatter(use_color=False)
        self.assertEqual(fmt.format(self._record(logging.WARNING, "Unable to open ASM file: x")),
                         "[WARNING] Unable to open ASM file: x")

    def test_color_format(self):
        fmt = ColorFormatter(use_color=True)
        text = fmt.format(self._record(logging.WARNING, "w"))
        self.assertTrue(text.startswith(Fore.YELLOW))
        self.assertTrue(text.endswith(Style.RESET_ALL))

    def test_setup_logger_level_and_single_handler(self):
        logger = setup_logger("DEBUG", use_color=False)
        handlers = len(logger.handlers)
        self.assertEqual(logger.level, logging.DEBUG)
        logger = setup_logger("warning")
        self.assertEqual(logger.level, logging.WARNING)
        self.assertEqual(len(logger.handlers), handlers)

    def test_recording_sink(self):
        sink = RecordingSink()
        sink.debug("a")
        sink.warning("b")
        sink.info("c")
        self.assertEqual(sink.messages(), ["a", "b", "c"])
        self.assertEqual(sink.messages("warning"), ["b"])
        self.assertEqual(len(sink), 3)


if __name__ == "__main__":
    unittest.main()
