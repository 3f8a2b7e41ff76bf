"""
Utility script to manage documents in the document store
"""
from pathlib import Path

import typer
from tabulate import tabulate

from src.config import load_settings
from src.document_store import DocumentStore

app = typer.Typer()


def get_store() -> DocumentStore:
    return DocumentStore(db_path=load_settings().db_path)


def split_paragraphs(text: str) -> list:
    """One text element per blank-line separated paragraph"""
    paragraphs = [p.strip() for p in text.replace("\r\n", "\n").split("\n\n")]
    return [p for p in paragraphs if p]


@app.command()
def list_documents(limit: int = 10):
    """List recent documents"""
    store = get_store()
    documents = store.list_documents(limit=limit)

    if not documents:
        print("No documents found.")
        return

    table_data = []
    for doc in documents:
        stats = store.get_document_stats(doc['document_id'])
        table_data.append([
            doc['document_id'][:8] + "...",
            doc['title'],
            stats['total_elements'],
            doc['updated_at']
        ])

    print("\n=== Documents ===")
    print(tabulate(table_data,
                   headers=['ID (short)', 'Title', 'Elements', 'Last Updated'],
                   tablefmt='grid'))
    print("\nUse full ID to annotate: python main.py run --document-id <FULL_ID>")


@app.command()
def show_document(document_id: str):
    """Show the text elements of a document"""
    elements = get_store().get_elements(document_id)

    if not elements:
        print(f"No text elements found for document: {document_id}")
        return

    print(tabulate(
        [[el['id'], el['text']] for el in elements],
        headers=['Element', 'Text'],
        tablefmt='grid',
        maxcolwidths=[None, 80],
    ))


@app.command()
def import_document(path: Path, title: str = None):
    """Import a text file, one element per paragraph"""
    text = path.read_text(encoding="utf-8")
    document_id = get_store().create_document(
        split_paragraphs(text), title=title or path.stem
    )
    print(f"Document imported: {document_id}")


@app.command()
def export_document(document_id: str, output_file: str = None):
    """Export a document to a text file"""
    elements = get_store().get_elements(document_id)

    if not elements:
        print(f"No text elements found for document: {document_id}")
        return

    if not output_file:
        output_file = f"document_{document_id[:8]}.txt"

    with open(output_file, 'w', encoding='utf-8') as f:
        f.write("\n\n".join(el['text'] for el in elements) + "\n")

    print(f"Document exported to: {output_file}")


@app.command()
def delete_document(document_id: str, confirm: bool = typer.Option(False, "--confirm")):
    """Delete a document"""
    if not confirm:
        print(f"Are you sure you want to delete document {document_id}?")
        print("Use --confirm flag to proceed")
        return

    get_store().delete_document(document_id)
    print(f"Document {document_id} deleted successfully.")


@app.command()
def update_title(document_id: str, title: str):
    """Update document title"""
    get_store().update_document_title(document_id, title)
    print(f"Title updated to: {title}")


@app.command()
def init_db():
    """Initialize database tables"""
    get_store()
    print("Database initialized successfully.")


if __name__ == "__main__":
    app()
