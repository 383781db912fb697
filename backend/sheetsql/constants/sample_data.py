SAMPLE_COLUMNS = ["ID", "Product", "Sales"]
SAMPLE_ROWS = [{"ID": "1", "Product": "Sample", "Sales": "500"}]
