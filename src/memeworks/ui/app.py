"""Gradio UI for Memeworks."""

import logging

import gradio as gr

from memeworks.core.config import config

from .components import MemeFormUI
from .handlers import (
    download_meme,
    load_catalog,
    select_template,
    update_bottom_text,
    update_top_text,
)
from .models import STATUS_CATALOG_LOADING, UIState

# Configure logging
logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> gr.Blocks:
    """Create the Gradio UI.

    Returns:
        Gradio Blocks app
    """
    app = gr.Blocks(title="Meme Generator")

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState())

        gr.Markdown("# Meme Generator")

        meme_image = gr.Image(
            label="Generated Meme",
            type="filepath",
            interactive=False,
            height=400,
        )
        url_output = gr.Textbox(label="Image URL", interactive=False)

        form = MemeFormUI(initial_template=config.initial_template)

        with gr.Row():
            download_btn = gr.Button("Download", variant="primary")
            download_file = gr.File(label="Downloaded image", interactive=False)

        status_output = gr.Markdown(value=STATUS_CATALOG_LOADING)

        # Catalog fetch on page load; the form works with the initial template meanwhile
        app.load(
            fn=load_catalog,
            inputs=[ui_state],
            outputs=[form.template, meme_image, url_output, status_output, ui_state],
        )

        # One handler per field; each returns the URL derived from the updated state
        form.template.input(
            fn=select_template,
            inputs=[form.template, ui_state],
            outputs=[meme_image, url_output, ui_state],
        )
        form.top_text.input(
            fn=update_top_text,
            inputs=[form.top_text, ui_state],
            outputs=[meme_image, url_output, ui_state],
        )
        form.bottom_text.input(
            fn=update_bottom_text,
            inputs=[form.bottom_text, ui_state],
            outputs=[meme_image, url_output, ui_state],
        )

        download_btn.click(
            fn=download_meme,
            inputs=[ui_state],
            outputs=[download_file, status_output, ui_state],
        )

    return app


def main():
    """Main entry point for the Gradio application."""
    logger.info("Starting Memeworks UI...")
    logger.info(f"Configuration: {config.model_dump()}")

    app = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
    )


if __name__ == "__main__":
    main()
