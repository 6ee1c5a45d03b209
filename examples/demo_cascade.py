"""
cascade_cipher — Live Demo
==========================
Run:  python examples/demo_cascade.py

Walks a message through both layers, prints the key table,
and shows how failures come back from the request boundary.
"""

import sys, os, logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cascade_cipher.keytable                   import build_key_table
from cascade_cipher.layers.layer1_substitution import encode, decode
from cascade_cipher.layers.layer2_groups       import apply_reversal, undo_reversal
from cascade_cipher.cipher                     import CipherRequest, run
from cascade_cipher.config                     import Settings

LINE  = "═" * 70
KEY   = "CASCADE"
START = 7
MSG   = "MEET ME AT THE OLD MILL AT NOON"

def header(n, name):
    print(f"\n{LINE}")
    print(f"  {n} — {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

logging.basicConfig(level=Settings.from_env().log_level, format=" %(message)s")

print(f"\n{LINE}")
print("  cascade_cipher — Demo")
print(LINE)
print(f"  Message: {MSG}")
print(f"  Key: {KEY}   Start number: {START}")

# ── KEY TABLE ────────────────────────────────────────────────────────────────
header("Key table", f"ranks for key {KEY}")
table = build_key_table(KEY)
print("  " + " ".join(f"{c}={r}" for c, r in table.items()))

# ── LAYER 1 ──────────────────────────────────────────────────────────────────
header("Layer 1", "SUBSTITUTION — keyed cascade")
ct = encode(MSG, KEY, START)
pt = decode(ct, KEY, START)
ok("Encrypted", ct)
ok("Decrypted", pt)
ok("Spaces dropped", f"{len(MSG)} chars in, {len(ct)} letters out")

# ── LAYER 2 ──────────────────────────────────────────────────────────────────
header("Layer 2", "OBFUSCATION — five-letter block reversal")
grouped = apply_reversal(ct)
ok("Reversed blocks", " ".join(grouped[i:i + 5] for i in range(0, len(grouped), 5)))
ok("Restored (padded)", undo_reversal(grouped))
ct2 = encode(MSG, KEY, START, reverse_groups=True)
ok("Both layers", ct2)
ok("Decrypted", decode(ct2, KEY, START, reverse_groups=True))

# ── REQUEST BOUNDARY ─────────────────────────────────────────────────────────
header("Requests", "explicit results")
for payload in (
    {"text": "TEST", "key": "KOD", "startNumber": 3, "operation": "encrypt"},
    {"text": "WDWQ", "key": "KOD", "startNumber": 3, "operation": "decrypt"},
    {"text": "TEST", "key": "AB",  "startNumber": 3, "operation": "encrypt"},
    {"text": "TEST1", "key": "KOD", "startNumber": 3, "operation": "encrypt"},
):
    outcome = run(CipherRequest.from_dict(payload))
    if outcome.ok:
        ok(f"{payload['operation']} {payload['text']}", outcome.result)
    else:
        print(f"  ✗  {payload['operation']} {payload['text']}: "
              f"{outcome.error.kind.value} — {outcome.error.message}")

print(f"\n{LINE}\n")
