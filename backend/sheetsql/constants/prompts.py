TRANSLATE_PROMPT = (
    "Convert to SQLite. Table:'{table}', Columns:[{columns}]. "
    'Output RAW SQL ONLY. No markdown. Query: "{question}"'
)
