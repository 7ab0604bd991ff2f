"""
Convenience Widget MCP Tools

One add_<widget> tool per common widget type. Each is a thin wrapper over
add_widget: the table entry names the exposed settings, the required ones
and the defaults; provided values are laid over the defaults.

The tools are generated from CONVENIENCE_WIDGETS at import time, each with
a real signature so FastMCP can derive its parameters.
"""

import copy
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from mcp.types import CallToolResult

from elementor_mcp.core.exceptions import ElementorMCPError, InvalidInputError
from elementor_mcp.services.mcp_server.tool_decorator import system_tool
from elementor_mcp.services.mcp_server.tool_registry import ToolCategory
from elementor_mcp.services.mcp_server.tool_result import (
    exception_result,
    success_result,
    unexpected_error_result,
)
from elementor_mcp.services.page_editor_service import PageEditorService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConvenienceWidget:
    tool_id: str
    name: str
    widget_type: str
    description: str
    properties: dict[str, dict[str, Any]]
    required: tuple[str, ...] = ()
    defaults: dict[str, Any] = field(default_factory=dict)
    # Needs Elementor Pro widgets in the catalog
    pro: bool = False


# =============================================================================
# Property schema helpers
# =============================================================================


def _text(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def _number(description: str) -> dict[str, Any]:
    return {"type": "number", "description": description}


def _integer(description: str) -> dict[str, Any]:
    return {"type": "integer", "description": description}


def _choice(description: str, values: list[str]) -> dict[str, Any]:
    return {"type": "string", "enum": values, "description": description}


def _toggle(description: str) -> dict[str, Any]:
    return _choice(f"{description} ('yes' to enable, '' to disable)", ["yes", ""])


def _color(description: str) -> dict[str, Any]:
    return _text(f"{description} (hex or rgba)")


def _size(description: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {"size": {"type": "number"}, "unit": {"type": "string"}},
        "description": f"{description}, e.g. {{\"size\": 20, \"unit\": \"px\"}}",
    }


def _link(description: str = "Link") -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "url": {"type": "string"},
            "is_external": {"type": "boolean"},
            "nofollow": {"type": "boolean"},
        },
        "description": f"{description}, e.g. {{\"url\": \"https://example.com\"}}",
    }


def _icon(description: str = "Icon") -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {"value": {"type": "string"}, "library": {"type": "string"}},
        "description": f"{description}, e.g. {{\"value\": \"fas fa-star\", \"library\": \"fa-solid\"}}",
    }


def _media(description: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {"url": {"type": "string"}, "id": {"type": "integer"}},
        "description": f"{description}, e.g. {{\"url\": \"https://...\", \"id\": 12}}",
    }


def _items(label: str, **properties: str) -> dict[str, Any]:
    """Array of objects whose item properties are given as name=json_type."""
    return {
        "type": "array",
        "items": {
            "type": "object",
            "properties": {name: {"type": kind} for name, kind in properties.items()},
        },
        "description": label,
    }


ALIGN = ["left", "center", "right", "justify"]
HTML_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6", "div", "span", "p"]
STAR_ICON = {"value": "fas fa-star", "library": "fa-solid"}


CONVENIENCE_WIDGETS: list[ConvenienceWidget] = [
    ConvenienceWidget(
        tool_id="add_heading",
        name="Add Heading",
        widget_type="heading",
        description="Add a heading widget to a container.",
        properties={
            "title": _text("Heading text"),
            "header_size": _choice("HTML tag", ["h1", "h2", "h3", "h4", "h5", "h6", "div", "span", "p"]),
            "size": _choice("Preset size", ["default", "small", "medium", "large", "xl", "xxl"]),
            "align": _choice("Text alignment", ALIGN),
            "title_color": _color("Text color"),
            "link": _link(),
        },
        required=("title",),
        defaults={"header_size": "h2"},
    ),
    ConvenienceWidget(
        tool_id="add_text_editor",
        name="Add Text Editor",
        widget_type="text-editor",
        description="Add a rich text (HTML) block to a container.",
        properties={
            "editor": _text("HTML content"),
            "align": _choice("Text alignment", ALIGN),
            "text_color": _color("Text color"),
        },
        required=("editor",),
    ),
    ConvenienceWidget(
        tool_id="add_image",
        name="Add Image",
        widget_type="image",
        description="Add an image widget to a container.",
        properties={
            "image": _media("Image"),
            "image_size": _choice("Image resolution", ["thumbnail", "medium", "large", "full"]),
            "align": _choice("Alignment", ["left", "center", "right"]),
            "caption_source": _choice("Caption source", ["none", "attachment", "custom"]),
            "caption": _text("Custom caption"),
            "link_to": _choice("Link target", ["none", "file", "custom"]),
            "link": _link("Custom link"),
        },
        required=("image",),
    ),
    ConvenienceWidget(
        tool_id="add_button",
        name="Add Button",
        widget_type="button",
        description="Add a button widget to a container.",
        properties={
            "text": _text("Button label"),
            "link": _link(),
            "size": _choice("Button size", ["xs", "sm", "md", "lg", "xl"]),
            "button_type": _choice("Button style", ["", "info", "success", "warning", "danger"]),
            "align": _choice("Alignment", ALIGN),
            "selected_icon": _icon(),
            "icon_align": _choice("Icon position", ["left", "right"]),
        },
        defaults={"text": "Click here", "size": "sm"},
    ),
    ConvenienceWidget(
        tool_id="add_video",
        name="Add Video",
        widget_type="video",
        description="Add a YouTube, Vimeo or hosted video to a container.",
        properties={
            "video_type": _choice("Video source", ["youtube", "vimeo", "dailymotion", "hosted"]),
            "youtube_url": _text("YouTube URL"),
            "vimeo_url": _text("Vimeo URL"),
            "autoplay": _toggle("Autoplay"),
            "mute": _toggle("Mute"),
            "loop": _toggle("Loop"),
            "controls": _toggle("Player controls"),
        },
        defaults={"video_type": "youtube"},
    ),
    ConvenienceWidget(
        tool_id="add_icon",
        name="Add Icon",
        widget_type="icon",
        description="Add an icon widget to a container.",
        properties={
            "selected_icon": _icon(),
            "view": _choice("View", ["default", "stacked", "framed"]),
            "shape": _choice("Shape", ["circle", "square"]),
            "primary_color": _color("Icon color"),
            "size": _size("Icon size"),
            "link": _link(),
            "align": _choice("Alignment", ["left", "center", "right"]),
        },
        defaults={"selected_icon": STAR_ICON},
    ),
    ConvenienceWidget(
        tool_id="add_spacer",
        name="Add Spacer",
        widget_type="spacer",
        description="Add vertical space to a container.",
        properties={"space": _size("Space height")},
        defaults={"space": {"size": 50, "unit": "px"}},
    ),
    ConvenienceWidget(
        tool_id="add_divider",
        name="Add Divider",
        widget_type="divider",
        description="Add a horizontal divider line to a container.",
        properties={
            "style": _choice("Line style", ["solid", "double", "dotted", "dashed"]),
            "weight": _size("Line weight"),
            "color": _color("Line color"),
            "width": _size("Line width"),
            "gap": _size("Vertical gap"),
        },
        defaults={"style": "solid"},
    ),
    ConvenienceWidget(
        tool_id="add_icon_box",
        name="Add Icon Box",
        widget_type="icon-box",
        description="Add an icon box (icon, title and description) to a container.",
        properties={
            "selected_icon": _icon(),
            "title_text": _text("Title"),
            "description_text": _text("Description"),
            "view": _choice("View", ["default", "stacked", "framed"]),
            "shape": _choice("Shape", ["circle", "square"]),
            "link": _link(),
            "title_color": _color("Title color"),
            "primary_color": _color("Icon color"),
        },
        defaults={"selected_icon": STAR_ICON},
    ),
    ConvenienceWidget(
        tool_id="add_accordion",
        name="Add Accordion",
        widget_type="accordion",
        description="Add an accordion with collapsible items to a container.",
        properties={
            "tabs": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "tab_title": {"type": "string"},
                        "tab_content": {"type": "string"},
                    },
                },
                "description": "Accordion items: [{\"tab_title\": ..., \"tab_content\": ...}]",
            },
            "selected_icon": _icon("Closed icon"),
            "selected_active_icon": _icon("Open icon"),
            "faq_schema": _toggle("Emit FAQ schema markup"),
        },
        defaults={"title_html_tag": "div"},
    ),
    ConvenienceWidget(
        tool_id="add_alert",
        name="Add Alert",
        widget_type="alert",
        description="Add an alert box to a container.",
        properties={
            "alert_type": _choice("Alert type", ["info", "success", "warning", "danger"]),
            "alert_title": _text("Title"),
            "alert_description": _text("Message"),
            "show_dismiss": _choice("Dismiss button", ["show", "hide"]),
        },
        defaults={"alert_type": "info", "show_dismiss": "show"},
    ),
    ConvenienceWidget(
        tool_id="add_counter",
        name="Add Counter",
        widget_type="counter",
        description="Add an animated number counter to a container.",
        properties={
            "starting_number": _number("Starting number"),
            "ending_number": _number("Ending number"),
            "prefix": _text("Number prefix"),
            "suffix": _text("Number suffix"),
            "duration": _number("Animation duration in ms"),
            "thousand_separator": _toggle("Thousand separator"),
            "title": _text("Title"),
        },
        defaults={"starting_number": 0, "ending_number": 100, "duration": 2000},
    ),
    ConvenienceWidget(
        tool_id="add_google_maps",
        name="Add Google Maps",
        widget_type="google_maps",
        description="Add an embedded Google map to a container.",
        properties={
            "address": _text("Location to show"),
            "zoom": _size("Zoom level, e.g. {\"size\": 10, \"unit\": \"px\"}"),
            "height": _size("Map height"),
        },
        defaults={"zoom": {"size": 10, "unit": "px"}},
    ),
    ConvenienceWidget(
        tool_id="add_icon_list",
        name="Add Icon List",
        widget_type="icon-list",
        description="Add a list of items with icons, such as features, checklists or contact details.",
        properties={
            "icon_list": _items(
                "List items: [{\"text\": ..., \"selected_icon\": ..., \"link\": ...}]",
                text="string",
                selected_icon="object",
                link="object",
            ),
            "view": _choice("Layout", ["traditional", "inline"]),
        },
        required=("icon_list",),
        defaults={"view": "traditional"},
    ),
    ConvenienceWidget(
        tool_id="add_image_box",
        name="Add Image Box",
        widget_type="image-box",
        description="Add an image box (image, title and description) to a container.",
        properties={
            "image": _media("Image"),
            "title_text": _text("Title"),
            "description_text": _text("Description"),
            "link": _link(),
            "title_size": _choice("Title HTML tag", HTML_TAGS),
        },
        required=("title_text",),
        defaults={"title_size": "h3"},
    ),
    ConvenienceWidget(
        tool_id="add_image_carousel",
        name="Add Image Carousel",
        widget_type="image-carousel",
        description="Add a rotating image carousel to a container.",
        properties={
            "carousel": _items("Images: [{\"url\": ..., \"id\": ...}]", url="string", id="integer"),
            "slides_to_show": _choice("Visible slides", [str(n) for n in range(1, 11)]),
            "navigation": _choice("Navigation", ["both", "arrows", "dots", "none"]),
            "autoplay": _toggle("Autoplay"),
            "autoplay_speed": _integer("Autoplay interval in ms"),
            "infinite": _toggle("Infinite loop"),
        },
        required=("carousel",),
        defaults={"navigation": "both", "autoplay": "yes", "infinite": "yes", "autoplay_speed": 5000},
    ),
    ConvenienceWidget(
        tool_id="add_progress",
        name="Add Progress Bar",
        widget_type="progress",
        description="Add an animated progress bar with a label and percentage.",
        properties={
            "title": _text("Label"),
            "progress_type": _choice("Color preset", ["", "info", "success", "warning", "danger"]),
            "percent": _size("Percentage, e.g. {\"size\": 50, \"unit\": \"%\"}"),
            "display_percentage": _toggle("Show percentage"),
            "inner_text": _text("Text inside the bar"),
        },
        defaults={"percent": {"size": 50, "unit": "%"}, "display_percentage": "yes"},
    ),
    ConvenienceWidget(
        tool_id="add_social_icons",
        name="Add Social Icons",
        widget_type="social-icons",
        description="Add social media icon links to a container.",
        properties={
            "social_icon_list": _items(
                "Icons: [{\"social_icon\": {\"value\": \"fab fa-facebook\", \"library\": \"fa-brands\"}, \"link\": {\"url\": ...}}]",
                social_icon="object",
                link="object",
            ),
            "shape": _choice("Icon shape", ["rounded", "square", "circle"]),
            "columns": _integer("Grid columns (0 = auto)"),
            "align": _choice("Alignment", ["left", "center", "right"]),
        },
        required=("social_icon_list",),
        defaults={"shape": "rounded"},
    ),
    ConvenienceWidget(
        tool_id="add_star_rating",
        name="Add Star Rating",
        widget_type="star-rating",
        description="Add a star rating display to a container.",
        properties={
            "rating_scale": _choice("Rating scale", ["5", "10"]),
            "rating": _size("Rating value, e.g. {\"size\": 4.5, \"unit\": \"px\"}"),
            "star_style": _choice("Star style", ["star_fontawesome", "star_unicode"]),
            "title": _text("Title"),
        },
        defaults={"rating_scale": "5", "rating": {"size": 5, "unit": "px"}},
    ),
    ConvenienceWidget(
        tool_id="add_tabs",
        name="Add Tabs",
        widget_type="tabs",
        description="Add tabbed content with a horizontal or vertical layout.",
        properties={
            "tabs": _items(
                "Tabs: [{\"tab_title\": ..., \"tab_content\": ...}]",
                tab_title="string",
                tab_content="string",
            ),
            "type": _choice("Tab layout", ["horizontal", "vertical"]),
        },
        required=("tabs",),
        defaults={"type": "horizontal"},
    ),
    ConvenienceWidget(
        tool_id="add_testimonial",
        name="Add Testimonial",
        widget_type="testimonial",
        description="Add a testimonial with quote, author name, job title and image.",
        properties={
            "testimonial_content": _text("Quote"),
            "testimonial_image": _media("Author image"),
            "testimonial_name": _text("Author name"),
            "testimonial_job": _text("Author job title"),
            "testimonial_image_position": _choice("Image position", ["aside", "top"]),
        },
        required=("testimonial_content", "testimonial_name"),
        defaults={"testimonial_image_position": "aside"},
    ),
    ConvenienceWidget(
        tool_id="add_toggle",
        name="Add Toggle",
        widget_type="toggle",
        description="Add expandable toggle items. Unlike an accordion, several items can be open.",
        properties={
            "tabs": _items(
                "Toggle items: [{\"tab_title\": ..., \"tab_content\": ...}]",
                tab_title="string",
                tab_content="string",
            ),
            "selected_icon": _icon("Closed icon"),
            "selected_active_icon": _icon("Open icon"),
            "title_html_tag": _choice("Title HTML tag", HTML_TAGS[:7]),
        },
        required=("tabs",),
        defaults={"title_html_tag": "div"},
    ),
    ConvenienceWidget(
        tool_id="add_html",
        name="Add HTML",
        widget_type="html",
        description="Add a custom HTML code block to a container.",
        properties={"html": _text("HTML code")},
        required=("html",),
    ),
    # Elementor Pro
    ConvenienceWidget(
        tool_id="add_form",
        name="Add Form (Pro)",
        widget_type="form",
        description="Add an Elementor Pro form with fields, a submit button and an email action.",
        properties={
            "form_name": _text("Form name"),
            "form_fields": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "field_type": {
                            "type": "string",
                            "enum": ["text", "email", "textarea", "url", "tel", "select",
                                     "radio", "checkbox", "number", "date", "hidden"],
                        },
                        "field_label": {"type": "string"},
                        "placeholder": {"type": "string"},
                        "required": {"type": "string", "enum": ["yes", ""]},
                        "width": {"type": "string", "enum": ["100", "80", "75", "66", "50", "33", "25"]},
                        "field_options": {"type": "string"},
                    },
                },
                "description": "Form fields",
            },
            "button_text": _text("Submit button label"),
            "email_to": _text("Email recipient"),
            "email_subject": _text("Email subject"),
        },
        required=("form_name",),
        defaults={"button_text": "Send"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_posts_grid",
        name="Add Posts Grid (Pro)",
        widget_type="posts",
        description="Add an Elementor Pro grid of posts.",
        properties={
            "posts_post_type": _choice("Post type to query", ["post", "page", "any"]),
            "posts_per_page": _integer("Number of posts"),
            "columns": _integer("Grid columns"),
            "pagination_type": _choice(
                "Pagination",
                ["", "numbers", "prev_next", "numbers_and_prev_next", "load_more_on_click"],
            ),
        },
        defaults={"posts_post_type": "post", "posts_per_page": 6, "columns": 3},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_countdown",
        name="Add Countdown (Pro)",
        widget_type="countdown",
        description="Add an Elementor Pro countdown timer.",
        properties={
            "countdown_type": _choice("Countdown mode", ["due_date", "evergreen"]),
            "due_date": _text("Due date as 'Y-m-d H:i'"),
            "show_days": _toggle("Show days"),
            "show_hours": _toggle("Show hours"),
            "show_minutes": _toggle("Show minutes"),
            "show_seconds": _toggle("Show seconds"),
        },
        defaults={
            "countdown_type": "due_date",
            "show_days": "yes",
            "show_hours": "yes",
            "show_minutes": "yes",
            "show_seconds": "yes",
        },
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_price_table",
        name="Add Price Table (Pro)",
        widget_type="price-table",
        description="Add an Elementor Pro price table for a pricing plan.",
        properties={
            "heading": _text("Plan name"),
            "sub_heading": _text("Sub-heading"),
            "currency_symbol": _choice("Currency symbol", ["dollar", "euro", "pound", "yen", "custom"]),
            "price": _text("Price amount"),
            "period": _text("Billing period, e.g. '/month'"),
            "features_list": _items(
                "Features: [{\"item_text\": ..., \"selected_item_icon\": ...}]",
                item_text="string",
                selected_item_icon="object",
            ),
            "button_text": _text("Button label"),
            "link": _link("Button link"),
        },
        required=("heading", "price"),
        defaults={"currency_symbol": "dollar", "button_text": "Get Started"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_flip_box",
        name="Add Flip Box (Pro)",
        widget_type="flip-box",
        description="Add an Elementor Pro flip box with a front and a back side.",
        properties={
            "title_text_a": _text("Front title"),
            "description_text_a": _text("Front description"),
            "title_text_b": _text("Back title"),
            "description_text_b": _text("Back description"),
            "graphic_element": _choice("Front graphic", ["none", "image", "icon"]),
            "selected_icon": _icon(),
            "button_text": _text("Back button label"),
            "link": _link(),
            "flip_effect": _choice("Flip effect", ["flip", "slide", "push", "zoom-in", "zoom-out", "fade"]),
            "flip_direction": _choice("Flip direction", ["left", "right", "up", "down"]),
        },
        required=("title_text_a",),
        defaults={"flip_effect": "flip", "flip_direction": "left"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_animated_headline",
        name="Add Animated Headline (Pro)",
        widget_type="animated-headline",
        description="Add an Elementor Pro headline with highlighted or rotating text.",
        properties={
            "headline_style": _choice("Animation style", ["highlight", "rotate"]),
            "animation_type": _choice(
                "Rotation animation",
                ["typing", "clip", "flip", "swirl", "blinds", "drop-in", "wave", "slide", "slide-down"],
            ),
            "marker": _choice(
                "Highlight shape",
                ["circle", "curly", "underline", "double", "double_underline",
                 "underline_zigzag", "diagonal", "strikethrough", "x"],
            ),
            "before_text": _text("Text before the animated part"),
            "highlighted_text": _text("Highlighted text"),
            "rotating_text": _text("Rotating entries, one per line"),
            "after_text": _text("Text after the animated part"),
            "tag": _choice("HTML tag", HTML_TAGS[:6]),
        },
        defaults={"headline_style": "highlight", "tag": "h3"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_call_to_action",
        name="Add Call to Action (Pro)",
        widget_type="call-to-action",
        description="Add an Elementor Pro call to action with title, description, button and optional graphic or ribbon.",
        properties={
            "title": _text("Heading"),
            "description": _text("Description"),
            "button": _text("Button label"),
            "link": _link("Button link"),
            "graphic_element": _choice("Graphic", ["none", "image", "icon"]),
            "graphic_image": _media("Graphic image"),
            "selected_icon": _icon(),
            "ribbon_title": _text("Ribbon text"),
            "title_tag": _choice("Title HTML tag", HTML_TAGS),
        },
        required=("title",),
        defaults={"title_tag": "h2", "button": "Click Here"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_slides",
        name="Add Slides (Pro)",
        widget_type="slides",
        description="Add an Elementor Pro full-width slider; each slide has a heading, description, button and background.",
        properties={
            "slides": _items(
                "Slides",
                heading="string",
                description="string",
                button_text="string",
                link="object",
                background_color="string",
                background_image="object",
            ),
            "navigation": _choice("Navigation", ["both", "arrows", "dots", "none"]),
            "autoplay": _toggle("Autoplay"),
            "autoplay_speed": _integer("Autoplay interval in ms"),
            "infinite": _toggle("Infinite loop"),
            "transition": _choice("Transition", ["slide", "fade"]),
            "transition_speed": _integer("Transition speed in ms"),
        },
        required=("slides",),
        defaults={"autoplay": "yes", "autoplay_speed": 5000, "infinite": "yes"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_testimonial_carousel",
        name="Add Testimonial Carousel (Pro)",
        widget_type="testimonial-carousel",
        description="Add an Elementor Pro carousel of testimonials.",
        properties={
            "slides": _items(
                "Testimonials: [{\"content\": ..., \"image\": ..., \"name\": ..., \"title\": ...}]",
                content="string",
                image="object",
                name="string",
                title="string",
            ),
            "skin": _choice("Skin", ["default", "bubble"]),
            "layout": _choice(
                "Layout",
                ["image_inline", "image_stacked", "image_above", "image_left", "image_right"],
            ),
            "slides_per_view": _choice("Visible slides", ["1", "2", "3", "4"]),
            "autoplay": _toggle("Autoplay"),
            "autoplay_speed": _integer("Autoplay interval in ms"),
        },
        required=("slides",),
        defaults={"skin": "default", "layout": "image_inline", "slides_per_view": "1", "autoplay": "yes"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_price_list",
        name="Add Price List (Pro)",
        widget_type="price-list",
        description="Add an Elementor Pro price list for menus, services or products.",
        properties={
            "price_list": _items(
                "Items: [{\"title\": ..., \"price\": ..., \"item_description\": ...}]",
                title="string",
                price="string",
                item_description="string",
                image="object",
                link="object",
            ),
            "title_tag": _choice("Title HTML tag", HTML_TAGS),
        },
        required=("price_list",),
        defaults={"title_tag": "span"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_gallery",
        name="Add Gallery (Pro)",
        widget_type="gallery",
        description="Add an Elementor Pro gallery with a grid, justified or masonry layout.",
        properties={
            "gallery": _items("Images: [{\"id\": ..., \"url\": ...}]", id="integer", url="string"),
            "gallery_layout": _choice("Layout", ["grid", "justified", "masonry"]),
            "columns": _integer("Columns"),
            "gap": _size("Gap between images"),
            "link_to": _choice("Link target", ["file", "custom", "none"]),
        },
        required=("gallery",),
        defaults={"gallery_layout": "grid", "columns": 4},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_share_buttons",
        name="Add Share Buttons (Pro)",
        widget_type="share-buttons",
        description="Add Elementor Pro buttons for sharing the current page.",
        properties={
            "share_buttons": _items(
                "Buttons: [{\"button\": \"facebook\", \"text\": ...}]",
                button="string",
                text="string",
            ),
            "view": _choice("Display", ["icon-text", "icon", "text"]),
            "skin": _choice("Skin", ["gradient", "minimal", "framed", "boxed", "flat"]),
            "shape": _choice("Shape", ["square", "rounded", "circle"]),
            "columns": _integer("Columns"),
        },
        required=("share_buttons",),
        defaults={"view": "icon-text", "shape": "square"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_table_of_contents",
        name="Add Table of Contents (Pro)",
        widget_type="table-of-contents",
        description="Add an Elementor Pro table of contents built from the page headings.",
        properties={
            "title": _text("Title"),
            "headings_by_tags": {
                "type": "array",
                "items": {"type": "string", "enum": HTML_TAGS[:6]},
                "description": "Heading tags to include, e.g. [\"h2\", \"h3\"]",
            },
            "marker_view": _choice("Marker", ["numbers", "bullets", "none"]),
            "hierarchical_view": _toggle("Hierarchical view"),
        },
        defaults={"title": "Table of Contents", "marker_view": "numbers", "hierarchical_view": "yes"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_blockquote",
        name="Add Blockquote (Pro)",
        widget_type="blockquote",
        description="Add an Elementor Pro blockquote with author and optional tweet button.",
        properties={
            "blockquote_content": _text("Quote"),
            "author_name": _text("Author"),
            "blockquote_skin": _choice("Skin", ["border", "quotation", "boxed", "clean"]),
            "tweet_button": _toggle("Tweet button"),
        },
        required=("blockquote_content",),
        defaults={"blockquote_skin": "border"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_lottie",
        name="Add Lottie Animation (Pro)",
        widget_type="lottie",
        description="Add an Elementor Pro Lottie animation from an external JSON URL.",
        properties={
            "source": _choice("Source", ["media_file", "external_url"]),
            "source_external_url": _text("Lottie JSON URL"),
            "trigger": _choice(
                "Trigger",
                ["arriving_to_viewport", "on_click", "on_hover", "bind_to_scroll", "none"],
            ),
            "loop": _toggle("Loop"),
            "play_speed": _size("Playback speed, e.g. {\"size\": 1, \"unit\": \"px\"}"),
        },
        defaults={"source": "external_url", "trigger": "arriving_to_viewport", "loop": "yes"},
        pro=True,
    ),
    ConvenienceWidget(
        tool_id="add_hotspot",
        name="Add Hotspot (Pro)",
        widget_type="hotspot",
        description="Add an Elementor Pro image with clickable hotspots.",
        properties={
            "image": _media("Background image"),
            "hotspot": _items(
                "Hotspots",
                hotspot_label="string",
                hotspot_link="object",
                hotspot_icon="object",
                hotspot_horizontal="string",
                hotspot_offset_x="object",
                hotspot_vertical="string",
                hotspot_offset_y="object",
                hotspot_tooltip_content="string",
            ),
        },
        required=("image", "hotspot"),
        pro=True,
    ),
]


# =============================================================================
# Tool generation
# =============================================================================

BASE_PROPERTIES: dict[str, dict[str, Any]] = {
    "post_id": {"type": "integer", "description": "Page/post ID"},
    "parent_id": {"type": "string", "description": "Parent container ID"},
    "position": {
        "type": "integer",
        "description": "Insert position (-1 = append)",
        "default": -1,
    },
}

JSON_TYPE_ANNOTATIONS: dict[str, Any] = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
    "object": dict[str, Any],
    "array": list[Any],
}


def _annotation(schema: dict[str, Any]) -> Any:
    return JSON_TYPE_ANNOTATIONS.get(schema.get("type", ""), Any)


def build_signature(widget: ConvenienceWidget) -> inspect.Signature:
    """Signature FastMCP reads: context, ids, required settings, then optional ones."""
    kind = inspect.Parameter.POSITIONAL_OR_KEYWORD
    params = [
        inspect.Parameter("context", kind, annotation=Any),
        inspect.Parameter("post_id", kind, annotation=int),
        inspect.Parameter("parent_id", kind, annotation=str),
    ]
    for key in widget.required:
        params.append(inspect.Parameter(key, kind, annotation=_annotation(widget.properties[key])))
    params.append(inspect.Parameter("position", kind, default=-1, annotation=int))
    for key, schema in widget.properties.items():
        if key in widget.required:
            continue
        params.append(
            inspect.Parameter(key, kind, default=None, annotation=Optional[_annotation(schema)])
        )
    return inspect.Signature(params, return_annotation=CallToolResult)


def build_input_schema(widget: ConvenienceWidget) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {**BASE_PROPERTIES, **widget.properties},
        "required": ["post_id", "parent_id", *widget.required],
    }


def build_settings(widget: ConvenienceWidget, values: dict[str, Any]) -> dict[str, Any]:
    """Defaults overlaid with the provided (non-None) exposed settings."""
    settings = copy.deepcopy(widget.defaults)
    for key, value in values.items():
        if key in widget.properties and value is not None:
            settings[key] = value
    for key in widget.required:
        if settings.get(key) in (None, "", [], {}):
            raise InvalidInputError(f"The {key} parameter is required.", field=key)
    return settings


def _make_tool(widget: ConvenienceWidget):
    async def add_convenience_widget(
        context: Any,
        post_id: int | None = None,
        parent_id: str | None = None,
        position: int = -1,
        **values: Any,
    ) -> CallToolResult:
        logger.info(
            f"MCP {widget.tool_id} called with post_id={post_id}, parent_id={parent_id}"
        )

        try:
            settings = build_settings(widget, values)
            result = await PageEditorService(context.get_backend()).add_widget(
                post_id, parent_id, widget.widget_type, settings, position
            )
            return success_result(
                f"Added {widget.widget_type} widget {result['element_id']} to {parent_id}",
                result,
            )
        except ElementorMCPError as e:
            return exception_result(e)
        except Exception as e:
            logger.exception(f"Error in {widget.tool_id} via MCP: {e}")
            return unexpected_error_result(f"adding {widget.widget_type} widget", e)

    add_convenience_widget.__name__ = widget.tool_id
    add_convenience_widget.__qualname__ = widget.tool_id
    add_convenience_widget.__doc__ = widget.description
    add_convenience_widget.__signature__ = build_signature(widget)  # type: ignore[attr-defined]
    return add_convenience_widget


PRO_TOOL_IDS = frozenset(w.tool_id for w in CONVENIENCE_WIDGETS if w.pro)


def register_convenience_tools() -> None:
    for widget in CONVENIENCE_WIDGETS:
        description = f"{widget.description} Shortcut for add_widget with widget_type='{widget.widget_type}'."
        if widget.pro:
            description += " Requires Elementor Pro."
        system_tool(
            id=widget.tool_id,
            name=widget.name,
            description=description,
            category=ToolCategory.WIDGET,
            input_schema=build_input_schema(widget),
        )(_make_tool(widget))


register_convenience_tools()
