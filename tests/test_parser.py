"""Tests for the lexer, the formula grammar and the script grammar."""

import unittest

from natded import (
    And, Impl, LexError, Not, Or, ParseError, RuleName, Var,
    parse_formula, parse_script, tokenize,
)

a, b, c, d = Var("a"), Var("b"), Var("c"), Var("d")


class TestLexer(unittest.TestCase):

    def kinds(self, text):
        return [t.kind for t in tokenize(text)]

    def test_numbered_keywords_are_single_tokens(self):
        toks = tokenize("andE1 andE2 orI1 orI2")
        self.assertEqual([t.kind for t in toks], ["RULE"] * 4)
        self.assertEqual([t.text for t in toks], ["andE1", "andE2", "orI1", "orI2"])

    def test_keywords_beat_identifiers(self):
        self.assertEqual(self.kinds("goal assm lem abort dNeg"), ["RULE"] * 5)
        self.assertEqual(self.kinds("a or b"), ["IDENT", "OR", "IDENT"])

    def test_longer_identifiers_are_not_split(self):
        toks = tokenize("orange goals lemma")
        self.assertEqual([t.kind for t in toks], ["IDENT"] * 3)
        self.assertEqual([t.text for t in toks], ["orange", "goals", "lemma"])

    def test_punctuation_and_newlines(self):
        self.assertEqual(
            self.kinds("- assm 12\n(~p & q) => r"),
            ["DASH", "RULE", "NUMBER", "NEWLINE",
             "LPAREN", "NOT", "IDENT", "AND", "IDENT", "RPAREN", "IMPL", "IDENT"])

    def test_whitespace_is_dropped(self):
        self.assertEqual(self.kinds("  a \t&\r b  "), ["IDENT", "AND", "IDENT"])

    def test_positions(self):
        toks = tokenize("goal a\n  implI")
        self.assertEqual((toks[-1].line, toks[-1].col), (2, 3))

    def test_unknown_character(self):
        with self.assertRaises(LexError) as cm:
            tokenize("goal A")
        self.assertTrue(str(cm.exception).startswith("Lexing and parsing failed:"))
        self.assertIn("column 6", str(cm.exception))


class TestFormulaGrammar(unittest.TestCase):

    def test_identifier(self):
        self.assertEqual(parse_formula("p"), Var("p"))

    def test_binary_connectives(self):
        self.assertEqual(parse_formula("a & b"), And(a, b))
        self.assertEqual(parse_formula("a or b"), Or(a, b))
        self.assertEqual(parse_formula("a => b"), Impl(a, b))

    def test_chain_keeps_head_and_folds_tail_left(self):
        self.assertEqual(parse_formula("a & b & c"), And(a, And(b, c)))
        self.assertEqual(parse_formula("a & b & c & d"), And(a, And(And(b, c), d)))
        self.assertEqual(parse_formula("a => b => a"), Impl(a, Impl(b, a)))

    def test_negation(self):
        self.assertEqual(parse_formula("~~p"), Not(Not(Var("p"))))
        self.assertEqual(parse_formula("~a & b"), And(Not(a), b))
        self.assertEqual(parse_formula("~(a & b)"), Not(And(a, b)))

    def test_parentheses(self):
        self.assertEqual(parse_formula("(a & b) or c"), Or(And(a, b), c))
        self.assertEqual(parse_formula("((a))"), a)

    def test_mixed_connectives_need_parentheses(self):
        with self.assertRaises(ParseError):
            parse_formula("a & b or c")
        with self.assertRaises(ParseError):
            parse_formula("a => b & c")

    def test_unclosed_parenthesis(self):
        with self.assertRaises(ParseError) as cm:
            parse_formula("(a & b")
        self.assertIn("end of input", str(cm.exception))

    def test_dangling_connective(self):
        with self.assertRaises(ParseError):
            parse_formula("a &")


class TestScriptGrammar(unittest.TestCase):

    def test_lines(self):
        rules = parse_script("goal (a => b => a)\nimplI\nimplI\nassm 1")
        self.assertEqual([r.name for r in rules],
                         [RuleName.GOAL, RuleName.IMPL_I, RuleName.IMPL_I, RuleName.ASSM])
        self.assertEqual(rules[0].param, Impl(a, Impl(b, a)))
        self.assertEqual(rules[3].param, 1)
        self.assertEqual([r.line for r in rules], [1, 2, 3, 4])

    def test_pop_marker(self):
        (rule,) = parse_script("- andE1 (a & b)")
        self.assertTrue(rule.pop)
        self.assertEqual(rule.name, RuleName.AND_E1)
        self.assertEqual(rule.param, And(a, b))

    def test_pop_only_and_empty_lines(self):
        rules = parse_script("-\n\n")
        self.assertEqual(len(rules), 3)
        self.assertTrue(rules[0].pop)
        self.assertIsNone(rules[0].name)
        self.assertFalse(rules[1].pop)
        self.assertIsNone(rules[1].name)

    def test_identifier_parameter_is_a_formula(self):
        (rule,) = parse_script("assm x")
        self.assertEqual(rule.param, Var("x"))

    def test_trailing_token_is_rejected(self):
        with self.assertRaises(ParseError) as cm:
            parse_script("goal a b")
        self.assertTrue(str(cm.exception).startswith("Lexing and parsing failed:"))

    def test_two_rule_names_on_one_line(self):
        with self.assertRaises(ParseError):
            parse_script("implI andI")

    def test_error_anywhere_aborts_the_script(self):
        with self.assertRaises(ParseError):
            parse_script("goal a\nimplI\nassm (")


if __name__ == "__main__":
    unittest.main()
