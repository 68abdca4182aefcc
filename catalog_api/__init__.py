"""Product catalog API: category tree, attribute resolution and product listing."""
