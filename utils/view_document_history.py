# view_document_history.py
import sqlite3
import json

def view_document_history(document_id=None, db_path="data/documents.db"):
    """
    View stored document versions

    Args:
        document_id: Specific document to view (optional)
        db_path: Path to the document database
    """
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    if document_id:
        query = """
            SELECT id, document_id, version, data, node_path,
                   modification_summary, created_at
            FROM document_versions
            WHERE document_id = ?
            ORDER BY version
        """
        cursor.execute(query, (document_id,))
    else:
        query = """
            SELECT id, document_id, version, data, node_path,
                   modification_summary, created_at
            FROM document_versions
            ORDER BY document_id, version
        """
        cursor.execute(query)

    rows = cursor.fetchall()
    conn.close()

    if not rows:
        print("❌ No documents found.")
        return 0

    print(f"\n📝 Found {len(rows)} version(s)\n")

    current_doc = None
    for row in rows:
        id_, doc_id, version, data, node_path, summary, created_at = row

        # New document header
        if current_doc != doc_id:
            print("\n" + "=" * 100)
            print(f"📄 DOCUMENT: {doc_id}")
            print("=" * 100)
            current_doc = doc_id

        print(f"\n📌 Version {version} (ID: {id_})")
        print(f"   ⏰ Created: {created_at}")
        print(f"   📝 Summary: {summary}")
        print(f"   🔧 Node: {node_path or '$'}")

        try:
            json_data = json.loads(data)
            if isinstance(json_data, dict):
                print(f"   📊 Top-level keys: {list(json_data.keys())}")
            elif isinstance(json_data, list):
                print(f"   📊 Array with {len(json_data)} items")
            else:
                print(f"   📊 Scalar: {json_data!r}")
        except json.JSONDecodeError as e:
            print(f"   ⚠️ Could not parse JSON: {e}")

        print("\n" + "-" * 100)

    return len(rows)


def list_all_documents(db_path="data/documents.db"):
    """List all document IDs with version counts"""
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    cursor.execute("""
        SELECT document_id, COUNT(*) as version_count,
               MIN(created_at) as first_edit, MAX(created_at) as last_edit
        FROM document_versions
        GROUP BY document_id
        ORDER BY last_edit DESC
    """)

    rows = cursor.fetchall()
    conn.close()

    print("\n🗂️  All Documents:\n")

    for doc_id, count, first_edit, last_edit in rows:
        print(f"📁 {doc_id}")
        print(f"   Versions: {count}")
        print(f"   First Edit: {first_edit}")
        print(f"   Last Edit: {last_edit}")
        print()

    return [row[0] for row in rows]


if __name__ == "__main__":
    import sys

    print("\n" + "=" * 100)
    list_all_documents()
    print("=" * 100)

    if len(sys.argv) > 1:
        print(f"\n📖 Viewing document: {sys.argv[1]}\n")
        view_document_history(document_id=sys.argv[1])
    else:
        print("\n📖 Viewing all documents:\n")
        view_document_history()
