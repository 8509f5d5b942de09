"""Default configuration template.

This template is written to ~/.config/relais/config.toml
when running `relais config init`.
"""

CONFIG_TEMPLATE = """\
# relais configuration

[google]
# OAuth client from Google Cloud Console (Desktop app type).
# client_id = "xxxxxx.apps.googleusercontent.com"
#
# For client_secret, use the RELAIS_GOOGLE_CLIENT_SECRET environment variable.

[spreadsheet]
# The spreadsheet used to review search results.
# id = "1AbCdEfGhIjKlMnOpQrStUvWxYz"

[defaults]
folder_path = "/"
max_threads = 500

# Sheet names inside the spreadsheet. Uncomment to override.
# [ledger]
# criteria_sheet = "Search"
# results_sheet = "Results"
# folders_sheet = "Folders"
#
# After filling in client_id, authenticate with:
#   relais config auth
"""
