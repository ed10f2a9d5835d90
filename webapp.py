"""Flask front end rendering the store's product grid."""

from __future__ import annotations

import logging
import os
from typing import Optional

from flask import Flask, jsonify, render_template_string, request

from storefront.errors import ConfigurationMissingError
from storefront.pipeline import StorefrontPipeline, create_pipeline

logger = logging.getLogger("webapp")


INDEX_TEMPLATE = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Shop</title>
    <style>
      body { font-family: Arial, sans-serif; margin: 2rem; }
      form { display: flex; flex-wrap: wrap; gap: 1rem; align-items: flex-end; margin-bottom: 2rem; }
      label { display: block; font-size: 0.9rem; }
      input, select { display: block; padding: 0.5rem; margin-top: 0.25rem; }
      button { padding: 0.5rem 1rem; background: #2d6cdf; color: #fff; border: none; border-radius: 4px; cursor: pointer; }
      .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(14rem, 1fr)); gap: 1.5rem; }
      .card { border: 1px solid #e0e0e0; border-radius: 6px; padding: 1rem; display: flex; flex-direction: column; }
      .card img { width: 100%; height: 12rem; object-fit: contain; background: #fafafa; }
      .card .title { margin: 0.75rem 0 0.5rem; font-size: 1rem; }
      .card .price { font-weight: bold; margin-bottom: 0.75rem; }
      .message { margin-top: 0.75rem; }
      .error { color: #c62828; }
      .hidden { display: none; }
    </style>
  </head>
  <body>
    <h1>Shop</h1>
    <form id="filter-form">
      <label>Sort by
        <select name="sortBy">
          <option value="">Best match</option>
          <option value="price_asc">Price: low to high</option>
          <option value="price_desc">Price: high to low</option>
          <option value="title_asc">Title</option>
        </select>
      </label>
      <label>Min price
        <input type="number" name="minPrice" step="0.01" min="0">
      </label>
      <label>Max price
        <input type="number" name="maxPrice" step="0.01" min="0">
      </label>
      <label>Keywords
        <input type="text" name="keywords" placeholder="e.g. oak">
      </label>
      <button type="submit">Apply</button>
    </form>
    <div id="message" class="message hidden"></div>
    <div id="products" class="grid"></div>
    <template id="product-template">
      <div class="card">
        <img class="thumbnail" alt="">
        <h2 class="title"></h2>
        <div class="price"></div>
        <a class="link" target="_blank" rel="noopener">View on eBay</a>
      </div>
    </template>
    <script>
      const form = document.getElementById('filter-form');
      const container = document.getElementById('products');
      const template = document.getElementById('product-template');
      const message = document.getElementById('message');

      function showMessage(text, isError) {
        message.textContent = text;
        message.classList.toggle('error', Boolean(isError));
        message.classList.toggle('hidden', !text);
      }

      function renderProducts(items) {
        container.innerHTML = '';
        if (!items.length) {
          showMessage('No products found.', false);
          return;
        }
        showMessage('', false);
        items.forEach(item => {
          const clone = template.content.cloneNode(true);
          const img = clone.querySelector('.thumbnail');
          if (item.imageUrl) {
            img.src = item.imageUrl;
          } else {
            img.classList.add('hidden');
          }
          img.alt = item.title || 'Product';
          clone.querySelector('.title').textContent = item.title || '';
          clone.querySelector('.price').textContent = item.currency ? `${item.currency} ${item.price}` : item.price;
          clone.querySelector('.link').href = item.listingUrl || '#';
          container.appendChild(clone);
        });
      }

      function loadProducts() {
        const params = new URLSearchParams();
        new FormData(form).forEach((value, key) => {
          if (value) {
            params.append(key, value);
          }
        });
        fetch('{{ url_for("products") }}?' + params.toString())
          .then(response => response.json().then(data => ({ ok: response.ok, data })))
          .then(({ ok, data }) => {
            if (!ok) {
              container.innerHTML = '';
              showMessage(data.error || 'Failed to load products.', true);
              return;
            }
            renderProducts(data.items || []);
          })
          .catch(() => showMessage('Unable to load products.', true));
      }

      form.addEventListener('submit', function(event) {
        event.preventDefault();
        loadProducts();
      });
      document.addEventListener('DOMContentLoaded', loadProducts);
    </script>
  </body>
</html>
"""


def create_app(pipeline: Optional[StorefrontPipeline] = None) -> Flask:
    app = Flask(__name__)
    app.config["PIPELINE"] = pipeline or create_pipeline()

    @app.route("/", methods=["GET"])
    def index():
        return render_template_string(INDEX_TEMPLATE)

    @app.route("/api/products", methods=["GET"])
    def products():
        logger.info(
            "Received query parameters: %s",
            {key: request.args.get(key) for key in ("sortBy", "minPrice", "maxPrice", "keywords")},
        )
        try:
            items = app.config["PIPELINE"].get_items(request.args)
        except ConfigurationMissingError as exc:
            logger.error("%s", exc)
            return jsonify({"error": str(exc)}), 500
        return jsonify({"items": [item.to_dict() for item in items]})

    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    app.run(debug=True, host="0.0.0.0", port=int(os.environ.get("PORT", "5000")))
