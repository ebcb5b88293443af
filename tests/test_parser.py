import unittest

from pylox import builtin, lang, parser, scanner
from pylox.reporter import Reporter


def parse(src):
    reporter = Reporter()
    tokens = scanner.scan(src, reporter)
    statements = parser.parse(tokens, reporter)
    return statements, reporter


class ExpressionTestCase(unittest.TestCase):
    def expr(self, src):
        statements, reporter = parse(src + ";")
        self.assertFalse(reporter, repr(reporter))
        self.assertEqual(len(statements), 1)
        self.assertIsInstance(statements[0], lang.Expression)
        return statements[0].expression

    def test_precedence(self):
        expr = self.expr("1 + 2 * 3")
        self.assertIsInstance(expr, lang.Binary)
        self.assertEqual(expr.operator.type, 'PLUS')
        self.assertEqual(expr.left.value, 1.0)
        self.assertIsInstance(expr.right, lang.Binary)
        self.assertEqual(expr.right.operator.type, 'STAR')

    def test_left_associative(self):
        expr = self.expr("1 - 2 - 3")
        self.assertEqual(expr.operator.type, 'MINUS')
        self.assertIsInstance(expr.left, lang.Binary)
        self.assertEqual(expr.left.left.value, 1.0)
        self.assertEqual(expr.left.right.value, 2.0)
        self.assertEqual(expr.right.value, 3.0)

    def test_comparison_below_equality(self):
        expr = self.expr("1 < 2 == true")
        self.assertEqual(expr.operator.type, 'EQUAL_EQUAL')
        self.assertEqual(expr.left.operator.type, 'LESS')

    def test_grouping(self):
        expr = self.expr("(1 + 2) * 3")
        self.assertEqual(expr.operator.type, 'STAR')
        self.assertIsInstance(expr.left, lang.Grouping)
        self.assertIsInstance(expr.left.expression, lang.Binary)

    def test_unary(self):
        expr = self.expr("!-x")
        self.assertIsInstance(expr, lang.Unary)
        self.assertEqual(expr.operator.type, 'BANG')
        self.assertIsInstance(expr.right, lang.Unary)
        self.assertEqual(expr.right.operator.type, 'MINUS')
        self.assertIsInstance(expr.right.right, lang.Variable)

    def test_logical(self):
        expr = self.expr("a or b and c")
        self.assertIsInstance(expr, lang.Logical)
        self.assertEqual(expr.operator.type, 'OR')
        self.assertIsInstance(expr.right, lang.Logical)
        self.assertEqual(expr.right.operator.type, 'AND')

    def test_assignment_is_right_associative(self):
        expr = self.expr("a = b = 1")
        self.assertIsInstance(expr, lang.Assign)
        self.assertEqual(expr.name.lexeme, 'a')
        self.assertIsInstance(expr.value, lang.Assign)
        self.assertEqual(expr.value.name.lexeme, 'b')
        self.assertEqual(expr.value.value.value, 1.0)

    def test_literals(self):
        for src, value in [
            ("true", True), ("false", False), ("nil", None),
            ("12", 12.0), ('"s"', 's'),
        ]:
            with self.subTest(src=src):
                expr = self.expr(src)
                self.assertIsInstance(expr, lang.Literal)
                self.assertEqual(expr.value, value)

    def test_node_identity(self):
        expr = self.expr("a + a")
        self.assertIsNot(expr.left, expr.right)
        self.assertNotEqual(expr.left, expr.right)
        self.assertEqual(len({expr.left: 0, expr.right: 1}), 2)


class StatementTestCase(unittest.TestCase):
    def test_print(self):
        statements, reporter = parse("print 1;")
        self.assertFalse(reporter)
        self.assertIsInstance(statements[0], lang.Print)

    def test_var(self):
        statements, _ = parse("var a; var b = 2;")
        self.assertIsInstance(statements[0], lang.Var)
        self.assertIsNone(statements[0].initializer)
        self.assertEqual(statements[1].name.lexeme, 'b')
        self.assertEqual(statements[1].initializer.value, 2.0)

    def test_block(self):
        statements, _ = parse("{ var a = 1; { print a; } }")
        block = statements[0]
        self.assertIsInstance(block, lang.Block)
        self.assertEqual(len(block.statements), 2)
        self.assertIsInstance(block.statements[1], lang.Block)

    def test_if_else(self):
        statements, _ = parse("if (a) print 1; else print 2;")
        stmt = statements[0]
        self.assertIsInstance(stmt, lang.If)
        self.assertIsInstance(stmt.thenBranch, lang.Print)
        self.assertIsInstance(stmt.elseBranch, lang.Print)

    def test_dangling_else(self):
        statements, _ = parse("if (a) if (b) print 1; else print 2;")
        outer = statements[0]
        self.assertIsNone(outer.elseBranch)
        self.assertIsNotNone(outer.thenBranch.elseBranch)

    def test_while(self):
        statements, _ = parse("while (a) a = a - 1;")
        self.assertIsInstance(statements[0], lang.While)
        self.assertIsInstance(statements[0].body, lang.Expression)

    def test_for_desugars_to_while(self):
        statements, reporter = parse(
            "for (var i = 0; i < 3; i = i + 1) print i;"
        )
        self.assertFalse(reporter)
        self.assertEqual(len(statements), 1)
        outer = statements[0]
        self.assertIsInstance(outer, lang.Block)
        init, loop = outer.statements
        self.assertIsInstance(init, lang.Var)
        self.assertIsInstance(loop, lang.While)
        self.assertEqual(loop.condition.operator.type, 'LESS')
        body, increment = loop.body.statements
        self.assertIsInstance(body, lang.Print)
        self.assertIsInstance(increment, lang.Expression)
        self.assertIsInstance(increment.expression, lang.Assign)

    def test_for_without_clauses(self):
        statements, reporter = parse("for (;;) break;")
        self.assertFalse(reporter)
        loop = statements[0]
        self.assertIsInstance(loop, lang.While)
        self.assertIsInstance(loop.condition, lang.Literal)
        self.assertIs(loop.condition.value, True)
        self.assertIsInstance(loop.body, lang.Break)

    def test_for_with_expression_initializer(self):
        statements, reporter = parse("for (i = 0; i < 1;) print i;")
        self.assertFalse(reporter)
        init, loop = statements[0].statements
        self.assertIsInstance(init, lang.Expression)
        self.assertIsInstance(loop.body, lang.Print)

    def test_break_in_loop(self):
        statements, reporter = parse("while (true) { if (x) break; }")
        self.assertFalse(reporter)
        body = statements[0].body
        self.assertIsInstance(body.statements[0].thenBranch, lang.Break)


class ParseErrorTestCase(unittest.TestCase):
    def assertErrors(self, reporter, *messages):
        self.assertEqual([err.msg() for err in reporter.errors], list(messages))
        for err in reporter.errors:
            self.assertIsInstance(err, builtin.ParseError)

    def test_break_outside_loop(self):
        statements, reporter = parse("break;")
        self.assertEqual(statements, [])
        self.assertErrors(reporter, "break can only be used inside a loop.")
        self.assertEqual(
            reporter.errors[0].report(),
            "[line 1] Error at 'break': break can only be used inside a loop.",
        )

    def test_break_after_loop(self):
        _, reporter = parse("while (false) {} break;")
        self.assertErrors(reporter, "break can only be used inside a loop.")

    def test_break_without_semicolon(self):
        _, reporter = parse("while (true) break")
        self.assertErrors(reporter, "Expect ';' after break.")
        self.assertEqual(reporter.errors[0].where, ' at end')

    def test_loop_depth_restored_after_error(self):
        _, reporter = parse("while (true print 1; break;")
        self.assertErrors(
            reporter,
            "Expect ')' after condition.",
            "break can only be used inside a loop.",
        )

    def test_missing_semicolon_at_end(self):
        _, reporter = parse("print 1")
        self.assertEqual(
            reporter.errors[0].report(),
            "[line 1] Error at end: Expect ';' after value.",
        )

    def test_synchronize_after_semicolon(self):
        statements, reporter = parse("print ; print 2;")
        self.assertErrors(reporter, "Expect expression.")
        self.assertEqual(len(statements), 1)
        self.assertEqual(statements[0].expression.value, 2.0)

    def test_synchronize_before_statement(self):
        statements, reporter = parse("var 1 = 2 print 3;")
        self.assertErrors(reporter, "Expect variable name.")
        self.assertEqual(len(statements), 1)
        self.assertIsInstance(statements[0], lang.Print)

    def test_one_error_per_statement(self):
        statements, reporter = parse("1 + + 2 3 4; var y = 3;")
        self.assertErrors(reporter, "Expect expression.")
        self.assertEqual(len(statements), 1)
        self.assertIsInstance(statements[0], lang.Var)

    def test_invalid_assignment_target(self):
        statements, reporter = parse("a + b = c; print 1;")
        self.assertErrors(reporter, "Invalid assignment target.")
        self.assertEqual(reporter.errors[0].token.type, 'EQUAL')
        # Parsing carries on past the malformed assignment
        self.assertEqual(len(statements), 2)
        self.assertIsInstance(statements[1], lang.Print)

    def test_grouped_assignment_target(self):
        _, reporter = parse("(a) = 1;")
        self.assertErrors(reporter, "Invalid assignment target.")

    def test_unclosed_block(self):
        _, reporter = parse("{ print 1;")
        self.assertErrors(reporter, "Expect '}' after block.")
        self.assertEqual(reporter.errors[0].where, ' at end')

    def test_unclosed_grouping(self):
        _, reporter = parse("print (1;")
        self.assertErrors(reporter, "Expect ')' after expression.")
        self.assertEqual(reporter.errors[0].where, " at ';'")

    def test_if_without_paren(self):
        _, reporter = parse("if true print 1;")
        self.assertErrors(reporter, "Expect '(' after 'if'.")

    def test_for_clause_errors(self):
        _, reporter = parse("for (var i = 0; i < 1 print i;")
        self.assertErrors(reporter, "Expect ';' after loop condition.")

    def test_errors_on_separate_lines(self):
        _, reporter = parse("print;\nvar;\n")
        self.assertEqual([err.line for err in reporter.errors], [1, 2])
