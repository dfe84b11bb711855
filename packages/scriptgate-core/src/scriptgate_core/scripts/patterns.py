"""Pattern catalog for script security scanning.

This module defines the regex tables used by the detectors. Every table is
module-level, read-only data shared by all validation calls. Patterns are
(compiled regex, label) tuples compiled once at import; case-insensitive
patterns carry an inline (?i) flag.

Bump PATTERN_CATALOG_VERSION whenever a table changes so stored validation
results can be traced back to the catalog that produced them.
"""

import re
from types import MappingProxyType

from scriptgate_core.types import ScriptLanguage, Severity

PATTERN_CATALOG_VERSION = "1.0"

# Language-agnostic risk categories, scanned in this order for every script
CRITICAL_PATTERNS = MappingProxyType({
    "destructive": (
        (re.compile(r"(?i)\brm\s+(-rf|--recursive\s+--force|-r\s+-f)\s+/"), "recursive forced delete"),
        (re.compile(r"(?i)\bdel\s+(/[sq]|-r)\s+[a-z]:\\"), "recursive drive delete"),
        (re.compile(r"(?i)\bformat\s+[a-z]:"), "drive format"),
        (re.compile(r"(?i)\bdd\s+if=.*of=.*bs="), "raw disk copy"),
        (re.compile(r"(?i)\bmkfs\."), "filesystem creation"),
        (re.compile(r"(?i)\bfdisk.*-l"), "partition table access"),
    ),
    "network": (
        (re.compile(r"(?i)\b(wget|curl|nc|netcat|telnet|ssh|scp|rsync)\b"), "network client"),
        (re.compile(r"(?i)\b(nmap|nslookup|dig|ping).*-[a-z]"), "network probing"),
        (re.compile(r"(?i)\biptables\b"), "firewall rules"),
        (re.compile(r"(?i)\bufw\s+(allow|deny)"), "firewall rules"),
    ),
    "code_execution": (
        (re.compile(r"(?i)\b(eval|exec|system|shell_exec|passthru)\s*\("), "dynamic evaluation call"),
        (re.compile(r"\$\(.*\)"), "command substitution"),
        (re.compile(r"`[^`]+`"), "backtick execution"),
        (re.compile(r"(?i)\bsudo\s+.*\$\("), "elevated command substitution"),
        (re.compile(r"(?i)\|\s*sh\b"), "pipe to sh"),
        (re.compile(r"(?i)\|\s*bash\b"), "pipe to bash"),
    ),
    "file_system": (
        (re.compile(r"(?i)\bchmod\s+777"), "world-writable permissions"),
        (re.compile(r"(?i)\bchown\s+root"), "ownership change to root"),
        (re.compile(r"(?i)\bmount\s+"), "mount"),
        (re.compile(r"(?i)\bumount\s+"), "unmount"),
        (re.compile(r"(?i)>.*/etc/"), "redirect into /etc"),
        (re.compile(r"(?i)\bcp\s+.*/etc/"), "copy into /etc"),
    ),
    "process": (
        (re.compile(r"(?i)\bkill\s+-9"), "forced kill"),
        (re.compile(r"(?i)\bkillall\s+"), "killall"),
        (re.compile(r"(?i)\bps\s+aux.*grep"), "process enumeration"),
        (re.compile(r"(?i)\bnohup\s+.*&"), "detached background process"),
        (re.compile(r"(?i)\bdisown\b"), "disowned process"),
    ),
    "environment": (
        (re.compile(r"(?i)\bexport\s+PATH="), "PATH override"),
        (re.compile(r"(?i)\bunset\s+PATH"), "PATH removal"),
        (re.compile(r"(?i)\bLD_PRELOAD="), "library preload"),
        (re.compile(r"(?i)\bLD_LIBRARY_PATH="), "library path override"),
    ),
    "credentials": (
        (re.compile(r"(?i)/etc/passwd"), "passwd file"),
        (re.compile(r"(?i)/etc/shadow"), "shadow file"),
        (re.compile(r"(?i)\$HOME/\.ssh"), "ssh directory"),
        (re.compile(r"(?i)id_rsa"), "ssh private key"),
        (re.compile(r"(?i)authorized_keys"), "ssh authorized keys"),
        (re.compile(r"(?i)\.aws/credentials"), "AWS credentials file"),
    ),
})

# Category -> severity; categories missing here are LOW
CATEGORY_SEVERITY = MappingProxyType({
    "destructive": Severity.CRITICAL,
    "credentials": Severity.CRITICAL,
    "code_execution": Severity.HIGH,
    "process": Severity.HIGH,
    "network": Severity.MEDIUM,
    "file_system": Severity.MEDIUM,
})

DEFAULT_SUGGESTION = "Review and minimize security impact."

CATEGORY_SUGGESTIONS = MappingProxyType({
    "destructive": "Avoid destructive file operations. Use backup strategies instead.",
    "code_execution": "Avoid dynamic code execution. Use predefined functions instead.",
    "network": "Limit network operations. Use secure protocols and validate inputs.",
    "credentials": "Never access credential files directly. Use secure credential management.",
    "process": "Use graceful process management instead of forced termination.",
    "file_system": "Use minimal file system permissions and validate paths.",
})

# Language-specific patterns; bash and batch rely on the critical categories only
LANGUAGE_PATTERNS = MappingProxyType({
    ScriptLanguage.POWERSHELL: (
        (re.compile(r"(?i)Invoke-Expression"), "Invoke-Expression"),
        (re.compile(r"(?i)IEX\s+"), "IEX alias"),
        (re.compile(r"(?i)Invoke-Command"), "Invoke-Command"),
        (re.compile(r"(?i)Start-Process.*-Verb\s+RunAs"), "elevated Start-Process"),
        (re.compile(r"(?i)Get-Credential"), "credential prompt"),
        (re.compile(r"(?i)ConvertTo-SecureString.*-AsPlainText"), "plain-text secure string"),
        (re.compile(r"(?i)Bypass.*ExecutionPolicy"), "execution policy bypass"),
        (re.compile(r"(?i)Hidden.*WindowStyle"), "hidden window"),
        (re.compile(r"(?i)EncodedCommand"), "encoded command"),
        (re.compile(r"(?i)DownloadString"), "remote download"),
        (re.compile(r"(?i)WebClient"), "WebClient"),
        (re.compile(r"(?i)System\.Net"), "System.Net"),
    ),
    ScriptLanguage.PYTHON: (
        (re.compile(r"(?i)\bexec\s*\("), "exec() function"),
        (re.compile(r"(?i)\beval\s*\("), "eval() function"),
        (re.compile(r"(?i)\b__import__\s*\("), "__import__() function"),
        (re.compile(r"(?i)\bcompile\s*\("), "compile() function"),
        (re.compile(r"(?i)\bgetattr\s*\("), "getattr() function"),
        (re.compile(r"(?i)\bsetattr\s*\("), "setattr() function"),
        (re.compile(r"(?i)\bsubprocess\."), "subprocess module"),
        (re.compile(r"(?i)\bos\.system"), "os.system() call"),
        (re.compile(r"(?i)\bos\.popen"), "os.popen() call"),
        (re.compile(r"(?i)\bos\.spawn"), "os.spawn*() call"),
    ),
    ScriptLanguage.ANSIBLE: (
        (re.compile(r"(?i)ansible_become_pass"), "become password"),
        (re.compile(r"(?i)ansible_sudo_pass"), "sudo password"),
        (re.compile(r"(?i)vault_password"), "vault password"),
        (re.compile(r"(?i)become:\s*yes.*become_method:\s*sudo"), "sudo become"),
        (re.compile(r"(?i)shell:\s*\|"), "multi-line shell module"),
        (re.compile(r"(?i)raw:"), "raw module"),
    ),
})

# Obfuscation (whole-document)
BASE64_PATTERN = re.compile(r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?")
BASE64_MIN_LENGTH = 51
HEX_ESCAPE_PATTERN = re.compile(r"(?i)\\x[0-9a-f]{2}")
CONCAT_PATTERN = re.compile(r"[\"'][^\"']*[\"']\s*[+&]\s*[\"'][^\"']*[\"']")
CONCAT_MAX_OCCURRENCES = 5

# Path traversal, plain and percent-encoded
TRAVERSAL_PATTERNS = (
    (re.compile(r"\.\.[/\\]"), "relative parent reference"),
    (re.compile(r"[/\\]\.\.[/\\]"), "embedded parent reference"),
    (re.compile(r"(?i)%2e%2e[/\\]"), "percent-encoded parent reference"),
    (re.compile(r"(?i)%2f%2e%2e"), "percent-encoded parent reference"),
)

SENSITIVE_FILE_PATTERNS = (
    (re.compile(r"(?i)/etc/passwd"), "/etc/passwd"),
    (re.compile(r"(?i)/etc/shadow"), "/etc/shadow"),
    (re.compile(r"(?i)/etc/sudoers"), "/etc/sudoers"),
    (re.compile(r"(?i)/root/\."), "root dotfiles"),
    (re.compile(r"(?i)/home/[^/]*/\.ssh"), "user ssh directory"),
    (re.compile(r"(?i)/var/log/auth\.log"), "auth log"),
    (re.compile(r"(?i)C:\\Windows\\System32\\config"), "Windows registry hives"),
    (re.compile(r"(?i)C:\\Users\\[^\\]*\\NTUSER\.DAT"), "user registry hive"),
)

ESCALATION_PATTERNS = (
    (re.compile(r"(?i)\bsudo\s+"), "sudo"),
    (re.compile(r"(?i)\bsu\s+-"), "su -"),
    (re.compile(r"(?i)runas\s+/user:"), "runas"),
    (re.compile(r"(?i)Start-Process.*-Verb\s+RunAs"), "Start-Process -Verb RunAs"),
    (re.compile(r"(?i)UAC"), "UAC"),
    (re.compile(r"(?i)elevation"), "elevation"),
    (re.compile(r"(?i)admin.*privilege"), "admin privilege"),
)

# Metadata capability flags (whole-text keyword tests)
CAPABILITY_PATTERNS = MappingProxyType({
    "has_elevated_commands": re.compile(r"(?i)\b(sudo|runas|elevat)"),
    "has_network_access": re.compile(r"(?i)\b(wget|curl|http|ftp|ssh)"),
    "has_file_system_access": re.compile(r"(?i)\b(rm|del|cp|mv|mkdir|touch)"),
    "has_dangerous_operations": re.compile(r"(?i)\b(format|fdisk|dd|mkfs)"),
})

CONTROL_STRUCTURE_PATTERNS = (
    re.compile(r"(?i)\bif\b"),
    re.compile(r"(?i)\belse\b"),
    re.compile(r"(?i)\bwhile\b"),
    re.compile(r"(?i)\bfor\b"),
    re.compile(r"(?i)\bswitch\b"),
    re.compile(r"(?i)\btry\b"),
    re.compile(r"(?i)\bcatch\b"),
)

FUNCTION_DEFINITION_PATTERNS = (
    re.compile(r"(?i)function\s+\w+"),
    re.compile(r"(?i)def\s+\w+"),
    re.compile(r"(?i)\b\w+\s*\(\s*\)\s*\{"),
)
FUNCTION_DEFINITION_WEIGHT = 2
