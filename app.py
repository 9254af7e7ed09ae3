# -*- coding: utf-8 -*-
from __future__ import annotations

import logging

from page_editor import create_app
from page_editor.config import HOST, LOG_LEVEL, PORT

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
log = logging.getLogger("page_editor")

app = create_app()


# ============================================================
# MAIN
# ============================================================
if __name__ == "__main__":
    log.info("Server running on http://%s:%s", HOST, PORT)
    log.info("  POST /save               save edited page content")
    log.info("  GET  /edit/<filename>    get page body for editing")
    log.info("  POST /save-blog-article  add an article to blog.js")
    log.info("  GET  /test-cpanel        test the cPanel connection")
    app.run(host=HOST, port=PORT, debug=False, use_reloader=False)
