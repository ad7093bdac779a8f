"""Internal constants shared across the library."""

FEED_URL = "http://echtedomain.club/lc.php?faction="
USER_AGENT = "towersnatch/1.0"

#: Fetch deadline for an interactive ``snatch`` request, in seconds.
QUERY_TIMEOUT: float = 5.0
#: Fetch deadline for the unattended poll, in seconds.
POLL_TIMEOUT: float = 20.0
#: Interval between unattended polls (30 minutes).
POLL_INTERVAL: float = 30 * 60

# ------------------------------------------------------------------
# Reply texts
# ------------------------------------------------------------------

MSG_TRANSPORT_ERROR = (
    "There was an error getting the list of unclaimed tower sites: {error}. Please try again later."
)
MSG_PARSE_ERROR = (
    "There seems to have been an error getting the list of unclaimed sites. Please try again later."
)
MSG_NOTHING_TO_SNATCH = "There are currently no tower sites to be snatched. Try again later."

HELP_TEXT = """\
<header2>Unplanted tower sites<end>
<tab><highlight><symbol>snatch<end>
List all tower sites that currently have no tower planted, together
with their level range and coordinates.

New unplanted sites are also announced to the org channel every 30 minutes.
The first check after a restart is only used as a baseline and never announced."""
