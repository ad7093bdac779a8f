"""Chat markup rendering for tower site notifications.

The markup dialect belongs to the host bot.  :class:`Markup` produces the
AOML-style tokens used by Anarchy Online chat bots (``<highlight>``,
``<pagebreak>``, ``text://`` blobs and ``chatcmd://`` links); hosts with a
different dialect subclass it and override the ``make_*`` methods.
"""

from __future__ import annotations

from collections.abc import Sequence

from towersnatch.models.site import TowerSite

BOT_NAME_TOKEN = "<myname>"


class Markup:
    """Default chat markup dialect."""

    PAGE_BREAK = "<pagebreak>"

    def __init__(self, bot_name: str | None = None) -> None:
        self._bot_name = bot_name

    def highlight(self, text: str) -> str:
        return f"<highlight>{text}<end>"

    def tell_bot(self, command: str) -> str:
        """Chat command sending *command* to the bot as a private message."""
        return f"/tell {self._bot_name or BOT_NAME_TOKEN} {command}"

    def make_chatcmd(self, label: str, command: str) -> str:
        return f"<a href='chatcmd://{command}'>{label}</a>"

    def make_blob(self, label: str, content: str, title: str) -> str:
        """Wrap *content* in an expandable popup opened by clicking *label*."""
        body = f"<header>{title}<end>\n\n{content}".replace('"', "&quot;")
        return f'<a href="text://{body}">{label}</a>'


def render_site_detail(site: TowerSite, markup: Markup) -> str:
    """Render the popup section describing a single tower site."""
    waypoint = markup.make_chatcmd(
        f"{site.x_coord}x{site.y_coord}",
        f"/waypoint {site.x_coord} {site.y_coord} {site.region_id}",
    )
    attacks = markup.make_chatcmd(
        "Recent attacks",
        markup.tell_bot(f"attacks {site.short_name} {site.site_number}"),
    )
    victories = markup.make_chatcmd(
        "Recent victories",
        markup.tell_bot(f"victory {site.short_name} {site.site_number}"),
    )
    return "\n".join(
        [
            f"Short name: {markup.highlight(f'{site.short_name} {site.site_number}')}",
            f"Long name: {markup.highlight(site.display_name)}",
            f"Level range: {markup.highlight(f'{site.min_ql}-{site.max_ql}')}",
            f"Center coordinates: {waypoint}",
            attacks,
            victories,
        ]
    )


def render_summary(blocks: Sequence[str], *, new: bool, markup: Markup) -> str:
    """Build the sentence announcing how many (new) sites can be snatched.

    Parameters
    ----------
    blocks : sequence of str
        Rendered site sections, one per site.
    new : bool
        ``True`` if the blocks only cover sites that were not unplanted
        at the previous check.
    """
    num_sites = len(blocks)
    noun = "site" if num_sites == 1 else "sites"
    count = "" if num_sites == 1 else f"{num_sites} "
    new_text = "new " if new else ""
    blob = markup.make_blob(
        f"{count}{new_text}unplanted tower {noun}",
        "\n\n".join(blocks),
        f"Unplanted tower {noun}",
    )
    verb = "is" if num_sites == 1 else "are"
    return f"The following {blob} {verb} ready to be snatched by your org."
