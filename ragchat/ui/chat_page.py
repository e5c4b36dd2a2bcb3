"""NiceGUI chat interface driven by a ConversationController."""

from nicegui import ui

from ragchat.config import get_client_config
from ragchat.conversation.controller import ConversationController
from ragchat.models.schemas import Message
from ragchat.transport.flowise import FlowiseTransport
from ragchat.ui.lifecycle import bind_to_client
from ragchat.ui.rendering import format_timestamp, message_html, source_preview, visible_sources

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }
    body { background: #f5f5f5; min-height: 100vh; }
    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }
    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }
    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }
    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
    .avatar-user { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }
    .avatar-assistant { background: #6b7280; }
    .source-item { border-left: 2px solid #c7d2fe; }
    .typing-dot {
        width: 8px; height: 8px;
        background: #667eea;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }
    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }
    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
    }
    .input-box:focus-within { border-color: #667eea; }
    .send-btn { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%) !important; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page. Each visit gets its own session-scoped controller."""
    ui.add_head_html(CUSTOM_CSS)
    config = get_client_config()
    controller = ConversationController(FlowiseTransport(config))

    messages_container: ui.column
    error_banner: ui.label
    input_field: ui.input

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "smart_toy"
        avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-lg")

    def render_sources(msg: Message) -> None:
        sources = visible_sources(msg, config.max_visible_sources)
        if not sources:
            return
        with ui.column().classes("gap-1 mt-2"):
            with ui.row().classes("items-center gap-1"):
                ui.icon("sticky_note_2").classes("text-sm text-gray-500")
                ui.label("Sources:").classes("text-xs font-semibold text-gray-500")
            for source in sources:
                with ui.row().classes("source-item pl-2 items-start gap-1 no-wrap"):
                    ui.icon("description").classes("text-xs text-gray-400")
                    ui.label(source_preview(source)).classes("text-xs text-gray-600")

    def render_message(msg: Message) -> None:
        align = "justify-end" if msg.is_user else "justify-start"
        bubble = "message-user" if msg.is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not msg.is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    ui.html(message_html(msg), sanitize=False).classes("text-sm leading-relaxed")
                    if not msg.is_user:
                        render_sources(msg)
                ui.label(format_timestamp(msg.created_at)).classes(
                    f"text-[10px] text-gray-400 {'self-end' if msg.is_user else 'self-start'}"
                )
            if msg.is_user:
                render_avatar(True)

    def render_typing_indicator() -> None:
        with ui.row().classes("w-full justify-start gap-3 items-end"):
            render_avatar(False)
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")

    def refresh() -> None:
        messages_container.clear()
        with messages_container:
            if not controller.timeline:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("smart_toy").classes("text-5xl text-gray-300")
                    ui.label("Welcome to AI Assistant").classes("text-lg text-gray-500")
                    ui.label(
                        "Ask me anything! Answers are grounded in your documents "
                        "through retrieval-augmented generation."
                    ).classes("text-sm text-gray-400 text-center")
            for msg in controller.timeline:
                render_message(msg)
            if controller.is_pending:
                render_typing_indicator()

        error_banner.set_text(controller.error or "")
        error_banner.set_visibility(controller.error is not None)
        if controller.is_pending:
            input_field.disable()
        else:
            input_field.enable()

    async def send_message() -> None:
        reply = await controller.submit()
        if reply is None:
            return
        if controller.error:
            ui.notify(controller.error, type="negative")
        input_field.run_method("focus")

    def new_chat() -> None:
        controller.clear()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("smart_toy").classes("text-white text-3xl")
                ui.label("AI Assistant").classes("text-lg font-semibold text-white")
            ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll_area,
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        error_banner = ui.label().classes(
            "w-full px-4 py-2 text-sm text-red-700 bg-red-50 border-t border-red-200"
        )

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.input(placeholder="Type your message...")
                    .props("borderless dense autofocus")
                    .classes("w-full")
                    .bind_value(controller, "draft")
                    .on("keydown.enter.prevent", send_message)
                )
            (
                ui.button(icon="send", on_click=send_message)
                .props("round unelevated")
                .classes("send-btn")
                .bind_enabled_from(controller, "can_send")
            )

    def on_change() -> None:
        refresh()
        scroll_area.scroll_to(percent=1.0)

    controller.subscribe(on_change)
    bind_to_client(ui.context.client, controller)
    refresh()


def main() -> None:
    ui.run(title="AI Assistant", port=8080, reload=False)


if __name__ in {"__main__", "__mp_main__"}:
    main()
