"""
Natural-deduction proof script checker
--------------------------------------
The trusted core of a small LCF-style proof assistant for propositional logic.

- Formula model (frozen dataclasses) with the canonical Unicode printer
- Lexer and recursive-descent parser for formulas and proof scripts
- Proof engine: `apply` moves a proof state by one rule, `run` folds a script
- Session runner producing a JSON-ready report (buffer message + log)

A script is one rule per line:

    goal (a => b => a)
    implI
    implI
    assm 1

A leading '-' on a line pops the next pending subgoal before the rule runs.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional, Tuple, Union
import enum
import json
import pathlib
import re
import sys

# =========================
# Formulas
# =========================

@dataclass(frozen=True)
class Formula:
    """Propositional formulas. Equality is structural."""
    def pretty(self) -> str: return str(self)

@dataclass(frozen=True)
class Var(Formula):
    name: str
    def __str__(self) -> str:
        if not self.name:
            raise ValueError("Undefined variable name.")
        return self.name

@dataclass(frozen=True)
class And(Formula):
    left: Formula
    right: Formula
    def __str__(self) -> str: return f"({self.left} ∧ {self.right})"

@dataclass(frozen=True)
class Or(Formula):
    left: Formula
    right: Formula
    def __str__(self) -> str: return f"({self.left} ∨ {self.right})"

@dataclass(frozen=True)
class Impl(Formula):
    left: Formula
    right: Formula
    def __str__(self) -> str: return f"({self.left} ⇨ {self.right})"

@dataclass(frozen=True)
class Not(Formula):
    inner: Formula
    def __str__(self) -> str: return f"¬{self.inner}"

@dataclass(frozen=True)
class Falsum(Formula):
    """Contradiction ⊥."""
    def __str__(self) -> str: return "⊥"

@dataclass(frozen=True)
class Verum(Formula):
    """Truth ⊤. No rule produces or consumes it."""
    def __str__(self) -> str: return "⊤"

# =========================
# Errors
# =========================

class ProofError(Exception):
    """Anything that stops a script from being processed."""

class ScriptError(ProofError):
    """The script text could not be turned into rules."""
    def __init__(self, detail: str):
        super().__init__(f"Lexing and parsing failed: {detail}")
        self.detail = detail

class LexError(ScriptError):
    pass

class ParseError(ScriptError):
    pass

class RuleError(ProofError):
    """A rule's precondition does not hold in the current proof state."""

# =========================
# Lexer
# =========================

class RuleName(enum.Enum):
    GOAL = "goal"
    ASSM = "assm"
    AND_I = "andI"
    AND_E1 = "andE1"
    AND_E2 = "andE2"
    OR_I1 = "orI1"
    OR_I2 = "orI2"
    OR_E = "orE"
    IMPL_I = "implI"
    IMPL_E = "implE"
    NOT_I = "notI"
    NOT_E = "notE"
    DNEG = "dNeg"
    LEM = "lem"
    ABORT = "abort"

    def __str__(self) -> str:
        return self.value

@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    line: int
    col: int

    def describe(self) -> str:
        if self.kind == "NEWLINE":
            return "end of line"
        return f"'{self.text}'"

_KEYWORDS = sorted((r.value for r in RuleName), key=len, reverse=True)

# Order breaks ties between equally long matches: keywords and 'or' beat identifiers.
TOKEN_SPEC: List[Tuple[str, str]] = [
    ("DASH", r"-"),
    ("NUMBER", r"\d+"),
    ("RULE", "|".join(_KEYWORDS)),
    ("OR", r"or"),
    ("IDENT", r"[a-z]+"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("AND", r"&"),
    ("IMPL", r"=>"),
    ("NOT", r"~"),
    ("NEWLINE", r"\n"),
    ("SPACE", r"[^\S\n]+"),
]

_TOKEN_RES = [(kind, re.compile(pat)) for kind, pat in TOKEN_SPEC]

def tokenize(text: str) -> List[Token]:
    """Split script text into tokens, longest match first. Spaces are dropped."""
    toks: List[Token] = []
    pos, line, col = 0, 1, 1
    while pos < len(text):
        best_kind, best_len = None, 0
        for kind, pat in _TOKEN_RES:
            m = pat.match(text, pos)
            if m and len(m.group()) > best_len:
                best_kind, best_len = kind, len(m.group())
        if best_kind is None:
            raise LexError(f"unexpected character {text[pos]!r} at line {line}, column {col}")
        lexeme = text[pos:pos + best_len]
        if best_kind != "SPACE":
            toks.append(Token(best_kind, lexeme, line, col))
        pos += best_len
        if best_kind == "NEWLINE":
            line, col = line + 1, 1
        else:
            col += best_len
    return toks

# =========================
# Parser
# =========================

@dataclass
class Rule:
    """One script line: optional pop marker, optional rule name, optional parameter."""
    name: Optional[RuleName] = None
    param: Union[int, Formula, None] = None
    pop: bool = False
    line: int = 0

    def __str__(self) -> str:
        parts: List[str] = []
        if self.pop: parts.append("-")
        if self.name is not None: parts.append(str(self.name))
        if self.param is not None: parts.append(str(self.param))
        return " ".join(parts) or "(empty)"

BINARY = {"AND": And, "OR": Or, "IMPL": Impl}

class ScriptParser:
    """
    Recursive-descent parser over a token list.

      formula  := operand (OP operand)*     -- one connective per chain
      operand  := '~' operand | IDENT | '(' formula ')'
      line     := ['-'] [RULE] [formula | NUMBER]
      script   := line ('\\n' line)*

    A chain x1 op x2 op ... op xn becomes op(x1, fold-left of x2..xn),
    so `a & b & c` is And(a, And(b, c)).
    """

    def __init__(self, tokens: List[Token]):
        self.toks = tokens
        self.pos = 0

    def peek(self) -> Optional[Token]:
        return self.toks[self.pos] if self.pos < len(self.toks) else None

    def advance(self) -> Token:
        tok = self.toks[self.pos]
        self.pos += 1
        return tok

    def error(self, expected: str) -> ParseError:
        tok = self.peek()
        if tok is None:
            return ParseError(f"expected {expected}, got end of input")
        return ParseError(f"expected {expected}, got {tok.describe()} at line {tok.line}, column {tok.col}")

    def expect(self, kind: str, expected: str) -> Token:
        tok = self.peek()
        if tok is None or tok.kind != kind:
            raise self.error(expected)
        return self.advance()

    # ---- formulas ----

    def parse_formula(self) -> Formula:
        first = self.parse_operand()
        tok = self.peek()
        if tok is None or tok.kind not in BINARY:
            return first
        op = tok.kind
        rest: List[Formula] = []
        while tok is not None and tok.kind in BINARY:
            if tok.kind != op:
                raise ParseError(
                    f"mixed connectives need parentheses at line {tok.line}, column {tok.col}")
            self.advance()
            rest.append(self.parse_operand())
            tok = self.peek()
        build = BINARY[op]
        tail = rest[0]
        for f in rest[1:]:
            tail = build(tail, f)
        return build(first, tail)

    def parse_operand(self) -> Formula:
        tok = self.peek()
        if tok is None:
            raise self.error("a formula")
        if tok.kind == "NOT":
            self.advance()
            return Not(self.parse_operand())
        if tok.kind == "IDENT":
            self.advance()
            return Var(tok.text)
        if tok.kind == "LPAREN":
            self.advance()
            inner = self.parse_formula()
            self.expect("RPAREN", "')'")
            return inner
        raise self.error("a formula")

    # ---- scripts ----

    def parse_line(self, lineno: int) -> Rule:
        rule = Rule(line=lineno)
        tok = self.peek()
        if tok is not None and tok.kind == "DASH":
            self.advance()
            rule.pop = True
            tok = self.peek()
        if tok is not None and tok.kind == "RULE":
            self.advance()
            rule.name = RuleName(tok.text)
            tok = self.peek()
        if tok is not None and tok.kind in ("IDENT", "LPAREN", "NOT"):
            rule.param = self.parse_formula()
        elif tok is not None and tok.kind == "NUMBER":
            rule.param = int(self.advance().text)
        return rule

    def parse_script(self) -> List[Rule]:
        lineno = 1
        rules = [self.parse_line(lineno)]
        while self.peek() is not None:
            self.expect("NEWLINE", "end of line")
            lineno += 1
            rules.append(self.parse_line(lineno))
        return rules

def parse_formula(text: str) -> Formula:
    p = ScriptParser(tokenize(text))
    f = p.parse_formula()
    if p.peek() is not None:
        raise p.error("end of input")
    return f

def parse_script(text: str) -> List[Rule]:
    return ScriptParser(tokenize(text)).parse_script()

# =========================
# Proof state
# =========================

@dataclass(frozen=True)
class Solved:
    """The current goal slot when nothing is left to prove."""
    def __str__(self) -> str: return "Done."

SOLVED = Solved()

Goal = Union[Formula, Solved]

@dataclass(frozen=True)
class Sequent:
    """A pending subgoal with the assumptions it brings along."""
    assumptions: Tuple[Formula, ...]
    goal: Formula

    def __str__(self) -> str:
        if not self.assumptions:
            return f"⊢ {self.goal}"
        return f"{', '.join(map(str, self.assumptions))} ⊢ {self.goal}"

@dataclass
class ProofState:
    assumptions: Tuple[Formula, ...] = ()
    current_goal: Goal = SOLVED
    other_goals: Deque[Sequent] = field(default_factory=deque)

    @classmethod
    def empty(cls) -> ProofState:
        return cls()

    @classmethod
    def start(cls, goal: Formula) -> ProofState:
        return cls(assumptions=(), current_goal=goal, other_goals=deque())

    @property
    def done(self) -> bool:
        return isinstance(self.current_goal, Solved) and not self.other_goals

# =========================
# Rules
# =========================

def _motive(rule: Rule, message: str) -> Formula:
    if not isinstance(rule.param, Formula):
        raise RuleError(message)
    return rule.param

def apply(state: ProofState, rule: Rule) -> ProofState:
    """Apply one rule and return the new state. The input state is left untouched."""
    assumptions = state.assumptions
    goal = state.current_goal
    pending = deque(state.other_goals)

    if rule.pop:
        if not pending:
            raise RuleError("No goals left.")
        if not isinstance(goal, Solved):
            raise RuleError("Current goal not proven yet.")
        nxt = pending.popleft()
        assumptions = assumptions + nxt.assumptions
        goal = nxt.goal

    r = rule.name
    if r is None:
        return ProofState(assumptions, goal, pending)

    if r is RuleName.GOAL:
        if not isinstance(rule.param, Formula):
            raise RuleError("Not a valid goal.")
        return ProofState.start(rule.param)

    if isinstance(goal, Solved):
        raise RuleError("No current goal. Either set or pop one.")

    if r is RuleName.ASSM:
        n = rule.param
        if not isinstance(n, int):
            raise RuleError("Assumption rule requires a positive number.")
        if not 1 <= n <= len(assumptions):
            raise RuleError("Assumption out of bounds.")
        if assumptions[n - 1] != goal:
            raise RuleError("Assumption does not match goal.")
        return ProofState(assumptions, SOLVED, pending)

    if r is RuleName.AND_I:
        if not isinstance(goal, And):
            raise RuleError("Not an & formula.")
        pending.extend([Sequent((), goal.left), Sequent((), goal.right)])
        return ProofState(assumptions, SOLVED, pending)

    if r in (RuleName.AND_E1, RuleName.AND_E2):
        m = _motive(rule, "No valid & formula given.")
        # andE1 eliminates down to the right conjunct, andE2 to the left one
        if r is RuleName.AND_E1:
            if isinstance(m, And) and m.right == goal:
                return ProofState(assumptions, m, pending)
            raise RuleError("And-elimination-1 does not apply.")
        if isinstance(m, And) and m.left == goal:
            return ProofState(assumptions, m, pending)
        raise RuleError("And-elimination-2 does not apply.")

    if r in (RuleName.OR_I1, RuleName.OR_I2):
        if not isinstance(goal, Or):
            raise RuleError("Not an or formula.")
        picked = goal.left if r is RuleName.OR_I1 else goal.right
        return ProofState(assumptions, picked, pending)

    if r is RuleName.OR_E:
        m = rule.param
        if not isinstance(m, Or):
            raise RuleError("Or-elimination needs a disjunctive motive.")
        pending.extend([Sequent((), m), Sequent((m.left,), goal), Sequent((m.right,), goal)])
        return ProofState(assumptions, SOLVED, pending)

    if r is RuleName.IMPL_I:
        if not isinstance(goal, Impl):
            raise RuleError("Impl-introduction does not apply.")
        return ProofState(assumptions + (goal.left,), goal.right, pending)

    if r is RuleName.IMPL_E:
        m = rule.param
        if not isinstance(m, Impl):
            raise RuleError("Impl-elimination needs an implicative motive.")
        pending.extend([Sequent((), m), Sequent((), m.left)])
        return ProofState(assumptions, SOLVED, pending)

    if r is RuleName.NOT_I:
        if not isinstance(goal, Not):
            raise RuleError("Not-introduction does not apply.")
        return ProofState(assumptions + (goal.inner,), Falsum(), pending)

    if r is RuleName.NOT_E:
        m = _motive(rule, "Not-elimination needs a formula.")
        pending.extend([Sequent((), Not(m)), Sequent((), m)])
        return ProofState(assumptions, SOLVED, pending)

    if r is RuleName.DNEG:
        return ProofState(assumptions, Not(Not(goal)), pending)

    if r is RuleName.LEM:
        if isinstance(goal, Or) and isinstance(goal.left, Not) and goal.left.inner == goal.right:
            return ProofState(assumptions, SOLVED, pending)
        raise RuleError("Excluded middle does not apply.")

    if r is RuleName.ABORT:
        return ProofState(assumptions, Falsum(), pending)

    raise RuleError(f"Rule {r} not implemented.")

def run(text: str) -> ProofState:
    """Parse a whole script and fold it over the empty state. Stops at the first error."""
    state = ProofState.empty()
    for rule in parse_script(text):
        state = apply(state, rule)
    return state

# =========================
# Reporting
# =========================

def format_state(state: ProofState) -> str:
    lines = ["Assumptions:"]
    lines += [f"  {a}" for a in state.assumptions]
    lines.append("Other goals:")
    lines += [f"  {s}" for s in state.other_goals]
    lines.append(f"Current goal: {state.current_goal}")
    return "\n".join(lines)

def run_session(text: str) -> Dict[str, Any]:
    """Run a script and collect a report. Errors end up in the report, never raised."""
    messages: List[str] = []
    try:
        rules = parse_script(text)
    except ScriptError as e:
        messages.append(f"[ERR] {e}")
        return {"ok": False, "done": False, "buffer": str(e), "goal": None, "state": None, "log": messages}

    state = ProofState.empty()
    for rule in rules:
        try:
            state = apply(state, rule)
        except RuleError as e:
            messages.append(f"[ERR] line {rule.line}: {rule}: {e}")
            return {"ok": False, "done": False, "buffer": str(e), "goal": None, "state": None, "log": messages}
        if rule.name is not None or rule.pop:
            messages.append(f"[OK] line {rule.line}: {rule} ⟹ {state.current_goal}")

    return {
        "ok": True,
        "done": state.done,
        "buffer": "OK.",
        "goal": str(state.current_goal),
        "state": format_state(state),
        "log": messages,
    }

# =========================
# Demo & CLI
# =========================

DEMO = "\n".join([
    "goal (a & b) => (b & a)",
    "implI",
    "andI",
    "- andE1 (a & b)",
    "assm 1",
    "- andE2 (a & b)",
    "assm 1",
])

def main():
    # CLI: python natded.py [script_file]
    if len(sys.argv) == 2:
        text = pathlib.Path(sys.argv[1]).read_text(encoding="utf-8")
    else:
        text = DEMO
    out = run_session(text)
    print("=== Proof Report ===")
    print(json.dumps(out, ensure_ascii=False, indent=2))

if __name__ == "__main__":
    main()
