"""Targeted unit tests for the shell scanning and sub-command helpers."""

from unittest import TestCase

from scripts.rtk_rewrite_impl.shell import (
    Token,
    find_operator,
    has_operator,
    split_args,
    split_at_operator,
    split_env_prefix,
    tokenize,
)
from scripts.rtk_rewrite_impl.subcommands import (
    cargo_subcommand,
    docker_subcommand,
    git_subcommand,
    kubectl_subcommand,
)


class EnvPrefixTests(TestCase):
    def test_no_env_prefix(self) -> None:
        self.assertEqual(split_env_prefix("ls -la"), ("", "ls -la"))

    def test_single_assignment(self) -> None:
        self.assertEqual(split_env_prefix("FOO=bar ls -la"), ("FOO=bar ", "ls -la"))

    def test_multiple_assignments_are_greedy(self) -> None:
        self.assertEqual(
            split_env_prefix("FOO=bar BAZ=qux ls"), ("FOO=bar BAZ=qux ", "ls")
        )

    def test_empty_value(self) -> None:
        self.assertEqual(split_env_prefix("FOO= git status"), ("FOO= ", "git status"))

    def test_quoted_value_with_space(self) -> None:
        self.assertEqual(
            split_env_prefix('MSG="a b" git status'), ('MSG="a b" ', "git status")
        )

    def test_invalid_identifier_is_not_a_prefix(self) -> None:
        self.assertEqual(split_env_prefix("1FOO=bar ls"), ("", "1FOO=bar ls"))

    def test_assignment_without_command_is_not_a_prefix(self) -> None:
        self.assertEqual(split_env_prefix("FOO=bar"), ("", "FOO=bar"))

    def test_split_is_reversible(self) -> None:
        cases = [
            "ls",
            "A=1 ls",
            "A=1  B=2\tgit status",
            "_X=y   cat f",
            'K="unterminated ls',
            "",
        ]
        for command in cases:
            with self.subTest(command=command):
                prefix, body = split_env_prefix(command)
                self.assertEqual(prefix + body, command)

    def test_split_of_prefix_plus_body_recovers_both(self) -> None:
        prefix = "RUST_LOG=debug CARGO_TERM_COLOR=always "
        body = "cargo test"
        self.assertEqual(split_env_prefix(prefix + body), (prefix, body))


class OperatorDetectionTests(TestCase):
    def test_pipe_is_operator(self) -> None:
        self.assertTrue(has_operator("grep pattern file | head"))

    def test_quoted_pipe_is_not_operator(self) -> None:
        self.assertFalse(has_operator('grep "a|b" file'))
        self.assertFalse(has_operator("grep 'a|b' file"))

    def test_escaped_pipe_is_not_operator(self) -> None:
        self.assertFalse(has_operator("grep a\\|b file"))

    def test_chains_and_separators(self) -> None:
        for command in ("ls && echo", "ls || echo", "ls; echo"):
            with self.subTest(command=command):
                self.assertTrue(has_operator(command))

    def test_substitutions(self) -> None:
        for command in ("cat $(ls)", "cat `ls`", "diff <(ls a) b"):
            with self.subTest(command=command):
                self.assertTrue(has_operator(command))

    def test_output_redirect(self) -> None:
        self.assertTrue(has_operator("cat file > out.txt"))
        self.assertTrue(has_operator("cat file >> out.txt"))

    def test_descriptor_duplication_is_not_operator(self) -> None:
        self.assertFalse(has_operator("ls 2>&1"))

    def test_plain_input_redirect_and_background_are_not_operators(self) -> None:
        self.assertFalse(has_operator("wc -l < file"))
        self.assertFalse(has_operator("sleep 1 &"))

    def test_escaped_semicolon_is_not_operator(self) -> None:
        self.assertFalse(has_operator("find . -exec rm {} \\;"))

    def test_single_quotes_do_not_honor_backslash(self) -> None:
        # 'a\' closes the quote, so the pipe after it is live.
        self.assertTrue(has_operator("echo 'a\\' | cat"))

    def test_unterminated_quote_runs_to_end(self) -> None:
        self.assertIsNone(find_operator('grep "abc | def'))

    def test_trailing_backslash_is_harmless(self) -> None:
        self.assertIsNone(find_operator("ls \\"))

    def test_find_operator_index(self) -> None:
        self.assertEqual(find_operator("ls -la | wc -l"), 7)


class SplitAtOperatorTests(TestCase):
    def test_no_operator(self) -> None:
        self.assertEqual(split_at_operator("grep x f"), ("grep x f", ""))

    def test_pipe_tail(self) -> None:
        self.assertEqual(
            split_at_operator("grep x f | sort"), ("grep x f", " | sort")
        )

    def test_chain_tail(self) -> None:
        self.assertEqual(
            split_at_operator("grep x f && echo ok"), ("grep x f", " && echo ok")
        )

    def test_descriptor_digits_move_with_redirect(self) -> None:
        self.assertEqual(
            split_at_operator("grep x f 2>/dev/null"), ("grep x f", " 2>/dev/null")
        )

    def test_ampersand_redirect_moves_with_redirect(self) -> None:
        self.assertEqual(
            split_at_operator("grep x f &>/dev/null"), ("grep x f", " &>/dev/null")
        )

    def test_digits_inside_word_stay_in_command(self) -> None:
        self.assertEqual(split_at_operator("cat file2>out"), ("cat file2", " >out"))


class TokenizeTests(TestCase):
    def test_split_on_spaces_and_tabs(self) -> None:
        self.assertEqual(split_args("a  b\tc"), ["a", "b", "c"])

    def test_quotes_are_stripped_from_values(self) -> None:
        self.assertEqual(split_args("grep \"a b\" 'c d'"), ["grep", "a b", "c d"])

    def test_raw_keeps_quoting(self) -> None:
        self.assertEqual(
            tokenize('-name "*.ts"'), [Token("-name", "-name"), Token('"*.ts"', "*.ts")]
        )

    def test_adjacent_quoted_parts_form_one_token(self) -> None:
        self.assertEqual(split_args("--include=\"*.gd\""), ["--include=*.gd"])

    def test_escapes_are_kept(self) -> None:
        self.assertEqual(split_args("a\\ b c"), ["a\\ b", "c"])

    def test_empty_quotes_are_a_token(self) -> None:
        self.assertEqual(split_args('grep "" file'), ["grep", "", "file"])

    def test_line_continuation_separates(self) -> None:
        self.assertEqual(split_args("git \\\n  status"), ["git", "status"])

    def test_unterminated_quote_runs_to_end(self) -> None:
        self.assertEqual(split_args("echo 'a b"), ["echo", "a b"])

    def test_empty_input(self) -> None:
        self.assertEqual(tokenize(""), [])


class SubcommandTests(TestCase):
    def test_git_plain(self) -> None:
        self.assertEqual(git_subcommand("git status"), "status")

    def test_git_dash_c_path(self) -> None:
        self.assertEqual(git_subcommand("git -C /tmp status"), "status")

    def test_git_config_pair_and_no_pager(self) -> None:
        self.assertEqual(
            git_subcommand("git -c color.ui=never --no-pager log -5"), "log"
        )

    def test_git_long_option_with_equals(self) -> None:
        self.assertEqual(git_subcommand("git --git-dir=.git diff"), "diff")

    def test_git_long_option_with_separate_value(self) -> None:
        self.assertEqual(git_subcommand("git --work-tree /w status"), "status")

    def test_git_attached_value(self) -> None:
        self.assertEqual(git_subcommand("git -C/tmp/repo show"), "show")

    def test_git_quoted_option_value(self) -> None:
        self.assertEqual(
            git_subcommand('git -c "user.name=A B" commit -m x'), "commit"
        )

    def test_git_does_not_consume_subcommand_arguments(self) -> None:
        self.assertEqual(git_subcommand("git log -C"), "log")

    def test_git_unknown_flag_fails_closed(self) -> None:
        # --foo is unknown, so the extracted word is the flag itself.
        self.assertEqual(git_subcommand("git --foo status"), "--foo")

    def test_git_no_subcommand(self) -> None:
        self.assertEqual(git_subcommand("git"), "")
        self.assertEqual(git_subcommand("git -C /tmp"), "")

    def test_docker_host_flag(self) -> None:
        self.assertEqual(docker_subcommand("docker -H host logs c"), "logs")

    def test_docker_context_equals(self) -> None:
        self.assertEqual(docker_subcommand("docker --context=prod ps"), "ps")

    def test_kubectl_namespace(self) -> None:
        self.assertEqual(
            kubectl_subcommand("kubectl --namespace prod logs pod"), "logs"
        )
        self.assertEqual(kubectl_subcommand("kubectl -n prod get pods"), "get")

    def test_cargo_toolchain(self) -> None:
        self.assertEqual(cargo_subcommand("cargo +nightly clippy"), "clippy")
        self.assertEqual(cargo_subcommand("cargo build --release"), "build")
        self.assertEqual(cargo_subcommand("cargo"), "")
