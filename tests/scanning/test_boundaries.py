"""Tests for the per-language function boundary matchers."""

import pytest

from code_smells.scanning.boundaries import (
    extract_name,
    indentation,
    match_dart,
    match_elixir,
    match_python,
    match_rust,
    match_typescript,
)
from code_smells.scanning.models import ANONYMOUS


class TestExtractName:
    """Test extract_name function."""

    def test_truncates_at_first_non_identifier(self):
        """Test the name ends at the first non-identifier character."""
        assert extract_name("parse_line(input: &str)") == "parse_line"
        assert extract_name("  spaced<T>(x)") == "spaced"

    def test_extra_characters(self):
        """Test language-specific name characters are kept."""
        assert extract_name("valid?(x) do", "?!") == "valid?"
        assert extract_name("$query(sel)", "$") == "$query"

    def test_anonymous_when_nothing_remains(self):
        """Test an empty or invalid name becomes anonymous."""
        assert extract_name("(a, b) {") == ANONYMOUS
        assert extract_name("") == ANONYMOUS
        assert extract_name("9lives()") == ANONYMOUS


def test_indentation_counts_leading_whitespace():
    """Test tabs and spaces each count one column."""
    assert indentation("    x") == 4
    assert indentation("\tx") == 1
    assert indentation("x") == 0


class TestMatchRust:
    """Test the Rust signature matcher."""

    @pytest.mark.parametrize(
        "line,name",
        [
            ("fn main() {", "main"),
            ("pub fn new() -> Self {", "new"),
            ("    pub(crate) async fn load(&self) {", "load"),
            ("pub const unsafe fn raw() {", "raw"),
            ('extern "C" fn callback() {', "callback"),
            ("fn generic<T: Clone>(x: T) -> T", "generic"),
        ],
    )
    def test_matches(self, line, name):
        """Test signatures are recognised with their names."""
        boundary = match_rust(line)
        assert boundary is not None
        assert boundary.name == name

    def test_records_indentation(self):
        assert match_rust("    fn area(&self) -> f64 {").indent == 4

    @pytest.mark.parametrize(
        "line",
        [
            "fn area(&self) -> f64;",
            "    fn area(&self) -> f64; // required",
            "let f = |x| x + 1;",
            "// fn commented() {",
            "struct Point {",
        ],
    )
    def test_rejects(self, line):
        """Test bodiless declarations and non-function lines are rejected."""
        assert match_rust(line) is None


class TestMatchTypeScript:
    """Test the TypeScript signature matcher."""

    @pytest.mark.parametrize(
        "line,name",
        [
            ("function load() {", "load"),
            ("export async function fetchData(url: string): Promise<void> {", "fetchData"),
            ("export default function () {", ANONYMOUS),
            ("function* ids() {", "ids"),
            ("const handler = async (req: Request) => {", "handler"),
            ("export const $select = (q: string) => {", "$select"),
            ("const render = function (props) {", "render"),
        ],
    )
    def test_matches(self, line, name):
        """Test signatures are recognised with their names."""
        boundary = match_typescript(line)
        assert boundary is not None
        assert boundary.name == name

    @pytest.mark.parametrize(
        "line",
        [
            "declare function ambient(): void;",
            "function overload(a: string): void;",
            "const add = (a: number, b: number) => a + b;",
            "const double = (x: number) => x * 2",
            "type Fn = () => void;",
            "interface Shape {",
            "export type Handler = (req: Request) => {",
            "if (ready) {",
        ],
    )
    def test_rejects(self, line):
        """Test bodiless declarations and non-function lines are rejected."""
        assert match_typescript(line) is None


class TestMatchDart:
    """Test the Dart signature matcher."""

    @pytest.mark.parametrize(
        "line,name",
        [
            ("void main() {", "main"),
            ("  Widget build(BuildContext context) {", "build"),
            ("  Future<List<String>> loadAll() async {", "loadAll"),
            ("  static int parse(String s) {", "parse"),
            ("  String? maybe() {", "maybe"),
        ],
    )
    def test_matches(self, line, name):
        """Test signatures are recognised with their names."""
        boundary = match_dart(line)
        assert boundary is not None
        assert boundary.name == name

    @pytest.mark.parametrize(
        "line",
        [
            "  int get total => a + b;",
            "  int get total {",
            "  set value(int v) {",
            "  void dispose();",
            "  String label() => 'x';",
            "  int count = compute(1);",
            "class Counter {",
        ],
    )
    def test_rejects(self, line):
        """Test bodiless declarations and non-function lines are rejected."""
        assert match_dart(line) is None


class TestMatchElixir:
    """Test the Elixir signature matcher."""

    @pytest.mark.parametrize(
        "line,name",
        [
            ("  def run(x) do", "run"),
            ("  defp helper do", "helper"),
            ("  defmacro my_macro(ast) do", "my_macro"),
            ("  def valid?(x) do", "valid?"),
            ("  def save!(x) when is_map(x) do", "save!"),
        ],
    )
    def test_matches(self, line, name):
        """Test signatures are recognised with their names."""
        boundary = match_elixir(line)
        assert boundary is not None
        assert boundary.name == name

    @pytest.mark.parametrize(
        "line",
        [
            "  def short(x), do: x",
            "  defp hidden(x),   do: x * 2",
            "defmodule App do",
            "  defstruct [:a]",
        ],
    )
    def test_rejects(self, line):
        """Test bodiless declarations and non-function lines are rejected."""
        assert match_elixir(line) is None


class TestMatchPython:
    """Test the Python signature matcher."""

    def test_matches(self):
        """Test signatures are recognised with their names."""
        assert match_python("def f(x):").name == "f"
        assert match_python("    async def handle(self, req):").name == "handle"
        assert match_python("    async def handle(self, req):").indent == 4

    def test_rejects(self):
        """Test bodiless declarations and non-function lines are rejected."""
        assert match_python("class Foo:") is None
        assert match_python("define = 1") is None
        assert match_python("# def commented():") is None
