"""Integration tests for the no-unused-styles analyzer on real source code."""
import textwrap

import pytest

from stylesweep.analyzer.nodes import Attribute, Identifier, Location, Return
from stylesweep.analyzer.parser import LanguageParser
from stylesweep.analyzer.tree_walker import TreeWalker
from stylesweep.analyzer.unused_styles import (
    UnusedStylesAnalyzer,
    analyze_source,
    analyze_tree,
    is_style_attribute,
)


def unused_names(source: str, language: str = 'tsx'):
    return [finding.name for finding in analyze_source(textwrap.dedent(source), language)]


def test_unused_style_is_reported():
    """Usage above the definition still counts."""
    source = textwrap.dedent("""\
        import { StyleSheet } from 'react-native';

        const Component = () => {
          return <View style={styles.container} />;
        };

        const styles = StyleSheet.create({
          container: {
            flex: 1,
          },
          unused: {
            margin: 10,
          },
        });
    """)
    findings = analyze_source(source)

    assert [f.name for f in findings] == ['unused']
    assert (findings[0].line, findings[0].column) == (11, 3)
    assert findings[0].message() == "Style 'unused' is defined but never used."
    assert findings[0].message('ja') == "スタイル 'unused' は定義されていますが使用されていません。"
    assert findings[0].rule_id == 'no-unused-styles'


def test_array_of_styles_marks_each_used():
    assert unused_names("""
        const Component = () => {
          return <View style={[styles.container, styles.padding]} />;
        };

        const styles = StyleSheet.create({
          container: { flex: 1 },
          padding: { padding: 10 },
        });
    """) == []


def test_style_returned_from_helper_is_used():
    assert unused_names("""
        const getContainerStyle = () => {
          return styles.container;
        };

        const App = () => <View style={getContainerStyle()} />;

        const styles = StyleSheet.create({ container: { flex: 1 } });
    """) == []


def test_same_name_in_two_containers_collapses_to_one_symbol():
    source = textwrap.dedent("""\
        const first = StyleSheet.create({ shared: { flex: 1 } });
        const second = StyleSheet.create({ shared: { flex: 2 } });
        const App = () => <View style={first.shared} />;
    """)
    analyzer = UnusedStylesAnalyzer()
    walker = TreeWalker()
    analyzer.register(walker)
    walker.walk(LanguageParser('tsx').parse_source(source))

    assert analyzer.findings == []
    definitions = analyzer.symbols.all_definitions()
    assert [name for name, _ in definitions] == ['shared']
    assert definitions[0][1].location.line == 2


def test_no_style_containers_means_no_findings():
    assert unused_names("""
        const App = () => <View style={styles.missing} />;
        const other = makeStyles({ unused: {} });
    """) == []


def test_whole_container_passed_marks_all_members_used():
    assert unused_names("""
        const styles = StyleSheet.create({
          list: { flex: 1 },
          item: { padding: 4 },
        });

        const Screen = () => <List contentContainerStyle={styles} />;
    """) == []


def test_ternary_marks_both_branches_and_test():
    assert unused_names("""
        const styles = StyleSheet.create({
          active: {},
          inactive: {},
          highlighted: {},
          never: {},
        });

        const A = ({ on }) => <View style={on ? styles.active : styles.inactive} />;
        const B = () => <View style={styles.highlighted ? {} : null} />;
    """) == ['never']


def test_destructuring_marks_keys_used():
    assert unused_names("""
        const styles = StyleSheet.create({
          container: {},
          text: {},
          footer: {},
        });

        function Screen() {
          const { container, text } = styles;
          return null;
        }
    """) == ['footer']


def test_logical_spread_and_unary_usages():
    assert unused_names("""
        const styles = StyleSheet.create({
          active: {},
          base: {},
          hidden: {},
          idle: {},
        });

        const A = ({ isActive }) => <View style={isActive && styles.active} />;
        const B = () => <View style={{ ...styles.base, margin: 4 }} />;
        const C = () => <View style={!styles.hidden} />;
    """) == ['idle']


def test_assignment_marks_styles_used():
    assert unused_names("""
        const styles = StyleSheet.create({ a: {}, b: {}, c: {} });

        let current;
        current = styles.a;
        current += styles.b;
    """) == ['c']


def test_computed_and_numeric_keys_are_never_reported():
    assert unused_names("""
        const styles = StyleSheet.create({
          [dynamicKey]: { flex: 1 },
          42: { flex: 2 },
          plain: { flex: 3 },
        });
    """) == ['plain']


def test_quoted_keys_are_definitions():
    assert unused_names("""
        const styles = StyleSheet.create({
          'quoted-used': {},
          "quoted-unused": {},
        });

        const A = () => <View style={styles['quoted-used']} />;
    """) == ['quoted-unused']


def test_non_style_attributes_do_not_count():
    assert unused_names("""
        const styles = StyleSheet.create({ a: {}, b: {}, c: {} });

        const A = () => <View testID={styles.a} STYLE={styles.b} containerStyle={styles.c} />;
    """) == ['a', 'b']


def test_qualified_access_only():
    """this.styles.x or a.b.x is not a direct container member access."""
    assert unused_names("""
        const styles = StyleSheet.create({ container: {} });

        class Screen extends React.Component {
          render() {
            return <View style={this.styles.container} />;
          }
        }
    """) == ['container']


def test_other_factories_are_not_containers():
    assert unused_names("""
        const styles = Sheet.create({ a: {} });
        const more = StyleSheet.compose({ b: {} });
        const { c } = StyleSheet.create({ c: {} });
    """) == []


def test_non_object_argument_registers_empty_container():
    analyzer = UnusedStylesAnalyzer()
    walker = TreeWalker()
    analyzer.register(walker)
    walker.walk(LanguageParser('tsx').parse_source("const styles = StyleSheet.create(baseStyles);\nconst none = StyleSheet.create();"))

    assert analyzer.symbols.lookup_container('styles') == frozenset()
    assert analyzer.symbols.lookup_container('none') is None
    assert analyzer.findings == []


def test_findings_follow_definition_order():
    assert unused_names("""
        const a = StyleSheet.create({ zeta: {}, alpha: {} });
        const b = StyleSheet.create({ mid: {} });
    """) == ['zeta', 'alpha', 'mid']


def test_plain_javascript_file():
    assert unused_names("""
        const styles = StyleSheet.create({ row: {}, col: {} });
        export const Row = () => <View style={styles.row} />;
    """, language='javascript') == ['col']


def test_analysis_is_idempotent_on_the_same_tree():
    tree = LanguageParser('tsx').parse_source(textwrap.dedent("""
        const styles = StyleSheet.create({ used: {}, unused: {} });
        const A = () => <View style={styles.used} />;
    """))

    first = analyze_tree(tree)
    second = analyze_tree(tree)

    assert [(f.name, f.line, f.column) for f in first] == [(f.name, f.line, f.column) for f in second]
    assert [f.name for f in first] == ['unused']


def test_files_do_not_share_state():
    assert unused_names("const styles = StyleSheet.create({ a: {} });") == ['a']
    # A fresh analysis knows nothing about the previous file's container
    assert unused_names("const A = () => <View style={styles} />;") == []


def test_malformed_source_completes():
    findings = analyze_source("const styles = StyleSheet.create({ a: {}, b: {\nconst el = <View style={styles.a")
    assert isinstance(findings, list)


def test_findings_unavailable_before_traversal_ends():
    analyzer = UnusedStylesAnalyzer()
    with pytest.raises(RuntimeError):
        analyzer.findings


def test_finalized_analyzer_rejects_further_visits():
    analyzer = UnusedStylesAnalyzer()
    assert analyzer.finalize() == []
    assert analyzer.finalized

    with pytest.raises(RuntimeError):
        analyzer.visit_return(Return(argument=Identifier('styles')))


def test_style_attribute_predicate():
    value = Identifier('styles')
    assert is_style_attribute(Attribute(name='style', value=value))
    assert is_style_attribute(Attribute(name='contentContainerStyle', value=value))
    assert is_style_attribute(Attribute(name='Style', value=value))
    assert not is_style_attribute(Attribute(name='STYLE', value=value))
    assert not is_style_attribute(Attribute(name='styles', value=value))
    assert not is_style_attribute(Attribute(name='style', value=None))
    assert not is_style_attribute(Attribute(name=None, value=value, location=Location()))


def test_fixture_components(fixtures_dir):
    parser = LanguageParser.from_file_extension(fixtures_dir / 'ProfileCard.jsx')
    findings = analyze_tree(parser.parse_file(fixtures_dir / 'ProfileCard.jsx'))
    assert [f.name for f in findings] == ['subtitle']

    parser = LanguageParser.from_file_extension(fixtures_dir / 'SettingsScreen.tsx')
    findings = analyze_tree(parser.parse_file(fixtures_dir / 'SettingsScreen.tsx'))
    assert [(f.name, f.line) for f in findings] == [('legacy-divider', 9)]
