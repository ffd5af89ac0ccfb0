"""Version information for i18n-collector."""

__version__ = "0.4.0"
__author__ = "Sezgin Paksoy"
__description__ = "Build-time translatable fragment collector with baseline diff reports"

# Changelog:
# 0.4.0 - Two-phase collect/finalize API
#       - CollectionSession seals into an immutable CollectedFragments snapshot
#       - finalize() only accepts a sealed snapshot
#       - Key collision diagnostics (KeyCollision) with optional warnings
#       - Ambiguous baseline detection (more than one default-locale input)
#
# 0.3.0 - Safe baseline parsing
#       - Generated baseline modules parsed as JSON / YAML flow data
#       - Payload is never executed
#       - BaselineError on malformed payloads
#
# 0.2.0 - Reports
#       - JSON and console reporters
#       - diff command with md/json/txt export
#       - report command driven by a JSON build manifest
#
# 0.1.0 - Initial release
#       - Fragment registry, aggregator, multiset diff
#       - i18n.html report
