"""Recursive descent parser: formula tokens -> AST.

Grammar::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('+' | '-') unary | primary
    primary := NUMBER | 'value' | FUNC '(' expr (',' expr)* ')' | '(' expr ')'
"""

from __future__ import annotations

from functools import lru_cache

from unitprefs.core.formula.tokenizer import Token, TokenType, tokenize
from unitprefs.core.formula.ast_nodes import Node, Number, Variable, UnaryOp, BinaryOp, Call
from unitprefs.errors import FormulaSyntaxError, UnsafeFormulaError

VARIABLE_NAME = "value"

# name -> (min args, max args); None = unbounded
FUNCTION_ARITY: dict[str, tuple[int, int | None]] = {
    "pow": (2, 2),
    "sqrt": (1, 1),
    "abs": (1, 1),
    "round": (1, 2),
    "floor": (1, 1),
    "ceil": (1, 1),
    "min": (1, None),
    "max": (1, None),
}

MAX_DEPTH = 64


class Parser:
    """Parses a token stream into a single expression tree."""

    def __init__(self, tokens: list[Token], source: str = ""):
        self.tokens = tokens
        self.source = source
        self.pos = 0
        self.depth = 0

    def parse(self) -> Node:
        if self._peek().type == TokenType.EOF:
            self._error("Formula is empty", self._peek())
        node = self._parse_expr()
        tok = self._peek()
        if tok.type != TokenType.EOF:
            self._error(f"Unexpected token '{tok.value}'", tok)
        return node

    def _parse_expr(self) -> Node:
        self._enter()
        node = self._parse_term()
        while self._match_op("+", "-"):
            op = self.tokens[self.pos - 1].value
            node = BinaryOp(op, node, self._parse_term())
        self.depth -= 1
        return node

    def _parse_term(self) -> Node:
        node = self._parse_unary()
        while self._match_op("*", "/"):
            op = self.tokens[self.pos - 1].value
            node = BinaryOp(op, node, self._parse_unary())
        return node

    def _parse_unary(self) -> Node:
        if self._match_op("+", "-"):
            op = self.tokens[self.pos - 1].value
            self._enter()
            operand = self._parse_unary()
            self.depth -= 1
            return UnaryOp(op, operand)
        return self._parse_primary()

    def _parse_primary(self) -> Node:
        tok = self._peek()

        if tok.type == TokenType.NUMBER:
            self._advance()
            return Number(float(tok.value))

        if tok.type == TokenType.IDENT:
            self._advance()
            if tok.value == VARIABLE_NAME:
                return Variable(tok.value)
            if tok.value in FUNCTION_ARITY:
                return self._parse_call(tok)
            raise UnsafeFormulaError(
                f"Identifier '{tok.value}' is not allowed", formula=self.source, col=tok.col
            )

        if tok.type == TokenType.LPAREN:
            self._advance()
            node = self._parse_expr()
            self._expect(TokenType.RPAREN, "')'")
            return node

        if tok.type == TokenType.EOF:
            self._error("Unexpected end of formula", tok)
        self._error(f"Unexpected token '{tok.value}'", tok)

    def _parse_call(self, name_tok: Token) -> Call:
        self._expect(TokenType.LPAREN, f"'(' after {name_tok.value}")
        args: list[Node] = []
        if self._peek().type != TokenType.RPAREN:
            args.append(self._parse_expr())
            while self._peek().type == TokenType.COMMA:
                self._advance()
                args.append(self._parse_expr())
        self._expect(TokenType.RPAREN, "')'")

        low, high = FUNCTION_ARITY[name_tok.value]
        if len(args) < low or (high is not None and len(args) > high):
            expected = str(low) if low == high else f"{low}+" if high is None else f"{low}-{high}"
            self._error(
                f"{name_tok.value}() takes {expected} argument(s), got {len(args)}", name_tok
            )
        return Call(name_tok.value, tuple(args))

    # ── Helper methods ──

    def _enter(self):
        self.depth += 1
        if self.depth > MAX_DEPTH:
            self._error("Formula is nested too deeply", self._peek())

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.type != TokenType.EOF:
            self.pos += 1
        return tok

    def _expect(self, tok_type: TokenType, description: str) -> Token:
        tok = self._peek()
        if tok.type != tok_type:
            got = "end of formula" if tok.type == TokenType.EOF else f"'{tok.value}'"
            self._error(f"Expected {description}, got {got}", tok)
        return self._advance()

    def _match_op(self, *ops: str) -> bool:
        tok = self._peek()
        if tok.type == TokenType.OP and tok.value in ops:
            self._advance()
            return True
        return False

    def _error(self, message: str, token: Token):
        raise FormulaSyntaxError(message, formula=self.source, col=token.col)


@lru_cache(maxsize=1024)
def compile_formula(formula: str) -> Node:
    """Tokenize and parse a formula. Results are cached per formula string."""
    return Parser(tokenize(formula), formula).parse()
