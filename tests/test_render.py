from __future__ import annotations

from towersnatch.catalog import InMemorySiteCatalog
from towersnatch.render import Markup, render_site_detail, render_summary


class TestMarkup:
    def test_blob_escapes_double_quotes(self) -> None:
        blob = Markup().make_blob("label", 'say "hi"', "Title")
        assert blob == '<a href="text://<header>Title<end>\n\nsay &quot;hi&quot;">label</a>'

    def test_chatcmd(self) -> None:
        assert Markup().make_chatcmd("go", "/waypoint 1 2 3") == "<a href='chatcmd:///waypoint 1 2 3'>go</a>"

    def test_bot_name_token_kept_without_name(self) -> None:
        assert Markup().tell_bot("attacks WW 1") == "/tell <myname> attacks WW 1"

    def test_bot_name_substituted(self) -> None:
        assert Markup("Towerbot").tell_bot("attacks WW 1") == "/tell Towerbot attacks WW 1"


def test_render_site_detail(catalog: InMemorySiteCatalog) -> None:
    site = catalog.find_sites_in_region(570)[0]
    lines = render_site_detail(site, Markup()).split("\n")
    assert lines == [
        "Short name: <highlight>WW 1<end>",
        "Long name: <highlight>Gnawed Den, Wailing Wastes<end>",
        "Level range: <highlight>20-30<end>",
        "Center coordinates: <a href='chatcmd:///waypoint 1100 2300 570'>1100x2300</a>",
        "<a href='chatcmd:///tell <myname> attacks WW 1'>Recent attacks</a>",
        "<a href='chatcmd:///tell <myname> victory WW 1'>Recent victories</a>",
    ]


class TestRenderSummary:
    def test_single_site(self) -> None:
        msg = render_summary(["A"], new=False, markup=Markup())
        assert msg == (
            'The following <a href="text://<header>Unplanted tower site<end>\n\nA">'
            "unplanted tower site</a> is ready to be snatched by your org."
        )

    def test_multiple_sites(self) -> None:
        msg = render_summary(["A", "B"], new=False, markup=Markup())
        assert msg == (
            'The following <a href="text://<header>Unplanted tower sites<end>\n\nA\n\nB">'
            "2 unplanted tower sites</a> are ready to be snatched by your org."
        )

    def test_new_sites(self) -> None:
        msg = render_summary(["A", "B", "C"], new=True, markup=Markup())
        assert ">3 new unplanted tower sites</a> are ready" in msg

    def test_single_new_site(self) -> None:
        msg = render_summary(["A"], new=True, markup=Markup())
        assert ">new unplanted tower site</a> is ready" in msg
