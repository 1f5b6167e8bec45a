from dupfinder.core.models import QuickHashAlgorithm

QUICK_HASH_ALIASES = {
    "xxh64": QuickHashAlgorithm.XXH64,
    "xxh3_64": QuickHashAlgorithm.XXH3_64,
    "xxh3": QuickHashAlgorithm.XXH3_64,
    "xxh3_128": QuickHashAlgorithm.XXH3_128,
    "xxh128": QuickHashAlgorithm.XXH128,
}

QUICK_HASH_CHOICES = list(QUICK_HASH_ALIASES.keys())

QUICK_HASH_HELP_TEXT = (
    "Algorithm for the quick (prefix) hash stage:\n"
    "  xxh64      : xxHash64 (default)\n"
    "  xxh3_64    : XXH3 64-bit (alias: xxh3)\n"
    "  xxh3_128   : XXH3 128-bit\n"
    "  xxh128     : XXH128\n"
    "Candidates are always confirmed with SHA-256 over the full content.\n"
)

SAMPLE_SIZE_HELP_TEXT = (
    "Bytes read from the start of each file for the quick hash\n"
    "(e.g., 4K, 64KB, 1M). Default: 8K\n"
)

EPILOG_TEXT = """
Examples:
  Find duplicates in the current directory
  %(prog)s

  Find duplicates in Downloads and write the report there
  %(prog)s ~/Downloads -o ~/Downloads

  Scan several directories as one set
  %(prog)s -d ~/Pictures /mnt/backup/Pictures -o pictures_report.txt

  Use a larger quick-hash sample and ignore empty files
  %(prog)s ~/Music --sample-size 64K --skip-empty
"""
