LANDING_TEMPLATE = """<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>Product API</title>
    <style>
      body {{ font-family: Segoe UI, Arial, Helvetica, sans-serif; background: #f6fbff; color: #123; padding: 24px }}
      .box {{ background: #fff; padding: 18px; border-radius: 8px; max-width: 820px; margin: auto }}
      a {{ color: #1e88e5 }}
      ul {{ line-height: 1.8 }}
    </style>
  </head>
  <body>
    <div class="box">
      <h1>Product API</h1>
      <p>Server running on port {port}</p>
      <p>Available endpoints:</p>
      <ul>
        <li><a href="/products">GET /products</a>: list all products</li>
        <li><a href="/products/instock">GET /products/instock</a>: list in-stock products</li>
        <li>POST /products: add a product (JSON body)</li>
        <li>PUT /products/:id: update a product (JSON body)</li>
        <li>DELETE /products/:id: delete a product</li>
      </ul>
      <p>Use a REST client (Postman/curl) to test POST/PUT/DELETE.</p>
    </div>
  </body>
</html>
"""


def render_landing_page(port: int) -> str:
    """Page d'accueil statique listant les endpoints"""
    return LANDING_TEMPLATE.format(port=port)
