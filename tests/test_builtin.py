import unittest

from pylox import builtin, lang


def token(type, lexeme, line=1):
    return lang.Token(type, lexeme, None, line)


class ValueTestCase(unittest.TestCase):
    def test_truthiness(self):
        self.assertFalse(builtin.isTruthy(None))
        self.assertFalse(builtin.isTruthy(False))
        self.assertTrue(builtin.isTruthy(True))
        self.assertTrue(builtin.isTruthy(0.0))
        self.assertTrue(builtin.isTruthy(""))

    def test_equality_requires_same_tag(self):
        self.assertTrue(builtin.isEqual(None, None))
        self.assertTrue(builtin.isEqual(1.0, 1.0))
        self.assertFalse(builtin.isEqual(1.0, True))
        self.assertFalse(builtin.isEqual(0.0, False))
        self.assertFalse(builtin.isEqual("1", 1.0))
        self.assertFalse(builtin.isEqual(None, False))

    def test_stringify(self):
        self.assertEqual(builtin.stringify(None), 'nil')
        self.assertEqual(builtin.stringify(True), 'true')
        self.assertEqual(builtin.stringify(False), 'false')
        self.assertEqual(builtin.stringify(3.0), '3')
        self.assertEqual(builtin.stringify(-0.0), '-0')
        self.assertEqual(builtin.stringify(-0.5), '-0.5')
        self.assertEqual(builtin.stringify(2.5), '2.5')
        self.assertEqual(builtin.stringify("text"), 'text')

    def test_is_number(self):
        self.assertTrue(builtin.isNumber(1.0))
        self.assertFalse(builtin.isNumber(True))
        self.assertFalse(builtin.isNumber("1"))


class ErrorReportTestCase(unittest.TestCase):
    def test_without_token(self):
        err = builtin.ParseError("Unexpected character.", None, line=3)
        self.assertEqual(err.where, '')
        self.assertEqual(err.report(), "[line 3] Error: Unexpected character.")

    def test_at_token(self):
        err = builtin.ParseError("Expect expression.", token(';', ';', 2))
        self.assertEqual(err.line, 2)
        self.assertEqual(err.report(), "[line 2] Error at ';': Expect expression.")

    def test_at_end(self):
        err = builtin.ParseError("Expect ';' after value.", token('EOF', '', 4))
        self.assertEqual(
            err.report(), "[line 4] Error at end: Expect ';' after value."
        )

    def test_logic_error(self):
        err = builtin.LogicError(
            "Already a variable with this name in this scope.",
            token('IDENTIFIER', 'a'),
        )
        self.assertIsInstance(err, builtin.LoxError)
        self.assertEqual(
            err.report(),
            "[line 1] Error at 'a': Already a variable with this name in this scope.",
        )

    def test_runtime_error(self):
        err = builtin.RuntimeError(
            "Operand must be a number.", token('MINUS', '-', 7)
        )
        self.assertEqual(err.msg(), "Operand must be a number.")
        self.assertEqual(err.report(), "Operand must be a number.\n[line 7]")
