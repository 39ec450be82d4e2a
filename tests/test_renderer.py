"""Tests renderer — projection de présentation + HTML des deux surfaces."""
import pytest

from story_blocks.blocks import (
    CardBlock, DividerBlock, EmbedBlock, GalleryBlock, GalleryImage, HeadingBlock,
    ImageBlock, MediaBlock, ParagraphBlock, QuoteBlock,
)
from story_blocks.core.normalizer import normalize
from story_blocks.renderer import (
    CardImages, CardVideo, CardView, EmbedView, GalleryView, HeadingView, HtmlRenderer,
    ImageView, MediaContent, MediaImage, MediaSlotView, Renderer,
    present, render_block, render_document, split_by_media,
)


# ── present : rien à afficher ─────────────────────────────────────────────────

@pytest.mark.parametrize("block", [
    HeadingBlock(text=""),
    ParagraphBlock(text=""),
    QuoteBlock(text=""),
    ImageBlock(url="", caption="caption only"),
    CardBlock(),
    CardBlock(media_type="video", video_url="https://vimeo.com/1"),
    GalleryBlock(title="T", images=[GalleryImage(url="")]),
    EmbedBlock(url=""),
    EmbedBlock(url="not a url"),
    EmbedBlock(url="https://x.com/someone"),
])
def test_empty_blocks_render_nothing(block):
    assert present(block) is None
    assert render_block(block) == ""


def test_media_always_presented():
    m = MediaBlock()
    view = present(m)
    assert isinstance(view, MediaSlotView)
    assert view.id == m.id


# ── present : variants ────────────────────────────────────────────────────────

def test_present_heading():
    view = present(HeadingBlock(level=3, text="Sub"))
    assert isinstance(view, HeadingView)
    assert (view.level, view.text) == (3, "Sub")


def test_present_image_alt_fallback():
    view = present(ImageBlock(url="/a.jpg"))
    assert isinstance(view, ImageView)
    assert view.alt == "Screenshot"
    assert view.caption is None


def test_present_card_link_and_label():
    view = present(CardBlock(title="T", link_url="example.com", link_label=""))
    assert isinstance(view, CardView)
    assert view.link_url == "https://example.com"
    assert view.link_label == "Learn more"
    assert view.media is None


def test_present_card_video():
    view = present(CardBlock(media_type="video", video_url="https://youtu.be/abc"))
    assert isinstance(view.media, CardVideo)
    assert view.media.embed_url == "https://www.youtube.com/embed/abc"


def test_present_card_image_grid_drops_empty_urls():
    view = present(CardBlock(media_type="imageGrid", image_urls=["a", "", "b"], image_layout="grid"))
    assert isinstance(view.media, CardImages)
    assert view.media.urls == ["a", "b"]
    assert view.media.layout == "grid"


def test_present_gallery_filters_images():
    g = GalleryBlock(title="", images=[GalleryImage(url="a", caption=""), GalleryImage(url="")],
                     with_background=True)
    view = present(g)
    assert isinstance(view, GalleryView)
    assert [i.url for i in view.images] == ["a"]
    assert view.images[0].caption is None
    assert view.title is None
    assert view.with_background is True


@pytest.mark.parametrize("url,provider", [
    ("https://twitter.com/u/status/99", "twitter"),
    ("https://www.facebook.com/page/posts/1", "facebook"),
    ("https://www.youtube.com/watch?v=zz", "youtube"),
    ("https://soundcloud.com/a/b", "player"),
])
def test_present_embed_providers(url, provider):
    view = present(EmbedBlock(url=url))
    assert isinstance(view, EmbedView)
    assert view.provider == provider


def test_present_embed_details():
    tw = present(EmbedBlock(url="https://x.com/u/status/5", size="compact", title="t"))
    assert tw.tweet_id == "5"
    assert tw.narrow is True
    assert tw.aspect_ratio == "4/3"
    fb = present(EmbedBlock(url="https://www.facebook.com/page/posts/1"))
    assert fb.src.startswith("https://www.facebook.com/plugins/post.php?href=https%3A%2F%2F")
    assert fb.src.endswith("&show_text=true")
    yt = present(EmbedBlock(url="https://youtu.be/q", size="wide"))
    assert yt.src == "https://www.youtube.com/embed/q"
    assert yt.aspect_ratio == "21/9"


# ── HTML ──────────────────────────────────────────────────────────────────────

def test_render_heading_escaped():
    html = render_block(HeadingBlock(level=2, text="A <b> B"))
    assert html.startswith("<h2")
    assert "A &lt;b&gt; B" in html


def test_render_paragraph_keeps_rich_text():
    assert "<b>bold</b>" in render_block(ParagraphBlock(text="<b>bold</b>"))


def test_render_divider():
    assert "<hr" in render_block(DividerBlock())


def test_render_card_layout_order():
    top = render_block(CardBlock(title="T", media_type="imageGrid", image_urls=["/i.jpg"]))
    assert top.index("card__media") < top.index("card__text")
    bottom = render_block(CardBlock(title="T", media_type="imageGrid", image_urls=["/i.jpg"],
                                    layout="mediaBottom"))
    assert bottom.index("card__text") < bottom.index("card__media")
    assert "card--narrow" in top


def test_media_slot_empty_without_host_content():
    assert render_block(MediaBlock()) == ""
    assert render_block(MediaBlock(), MediaContent()) == ""
    assert render_block(MediaBlock(), MediaContent(trailer_url="https://vimeo.com/1")) == ""


def test_media_spliced_at_marker_position():
    doc = normalize([ParagraphBlock(text="Intro"), MediaBlock(), ParagraphBlock(text="Outro")])
    media = MediaContent(trailer_url="https://youtu.be/tr",
                         gallery=[MediaImage(url="/g1.jpg", caption="one"), MediaImage(url="  ")])
    html = render_document(doc, media)
    assert html.index("Intro") < html.index("story__trailer") < html.index("Outro")
    assert "https://www.youtube.com/embed/tr" in html
    assert html.count("<img") == 1


def test_surfaces_render_identically():
    doc = normalize([HeadingBlock(text="T"), ParagraphBlock(text="p"), MediaBlock(),
                     CardBlock(title="c"), EmbedBlock(url="https://youtu.be/x")])
    media = MediaContent(trailer_url="https://youtu.be/t")
    preview = render_document(doc, media, surface="preview")
    article = render_document(doc, media, surface="article")
    assert preview.replace("story--preview", "story--article") == article


def test_split_by_media():
    a, m, b = ParagraphBlock(text="a"), MediaBlock(), ParagraphBlock(text="b")
    assert split_by_media([a, m, b]) == ([a], [b])
    assert split_by_media([a, b]) == ([], [a, b])


def test_html_renderer_satisfies_protocol():
    r = HtmlRenderer("preview")
    assert isinstance(r, Renderer)
    assert 'class="story story--preview"' in r.render_document(normalize([]))
