import re
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

# Patterns for committed credentials
PATTERNS = [
    re.compile(r"(?<![0-9A-Za-z])(?:0x)?[0-9a-fA-F]{64}(?![0-9A-Za-z])"),  # raw secp256k1 private key
    re.compile(r"(?i)deploy_\w*private_key\s*[:=]\s*['\"]?(?:0x)?[0-9a-f]{16,}"),
    re.compile(r"(?i)(?:mnemonic|seed_phrase)\s*[:=]\s*['\"]?(?:[a-z]+\s+){11,}[a-z]+"),
    re.compile(r"(?i)(?:api|secret|token)[^\n]{0,40}['\"][A-Za-z0-9_-]{16,}['\"]"),
]

ALLOWLIST_EXT = {".png", ".jpg", ".jpeg", ".gif", ".pdf", ".db", ".bin"}


def file_text(p: Path) -> str:
    try:
        return p.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return ""


def scan(paths: Iterable[str]) -> List[Tuple[str, str]]:
    violations = []
    for path in paths:
        p = Path(path)
        if not p.is_file() or p.suffix.lower() in ALLOWLIST_EXT:
            continue
        text = file_text(p)
        for pat in PATTERNS:
            for m in pat.finditer(text):
                frag = m.group(0)
                if "YOUR" in frag.upper() or "PLACEHOLDER" in frag.upper():
                    continue
                if "# secrets: allow" in text[max(0, m.start()-120):m.end()+120]:
                    continue
                violations.append((str(p), frag[:12] + "..."))
    return violations


def main(paths):
    violations = scan(paths)
    if violations:
        print("Potential secrets detected:")
        for f, frag in violations:
            print(f" - {f}: {frag}")
        print("If these are false positives, add an inline comment: # secrets: allow")
        sys.exit(1)
    sys.exit(0)

if __name__ == "__main__":
    main(sys.argv[1:])
