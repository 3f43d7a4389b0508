# encoding: utf-8
"""
chill.couchdb

Server and database objects that hand out ready-to-run actions.

Every method returns an action; nothing touches the network until you call
`run()` (blocking) or `run_async()` (a tornado coroutine) on it:

    >>> couch = Couch('http://127.0.0.1:5984')
    >>> couch.create_database('baseball').run()
    >>> db = couch.db('baseball')
    >>> doc_id, rev = db.create_document({'name': 'Babe Ruth'}).run()
    >>> db.read_document(doc_id).run().get_content()
    {'name': 'Babe Ruth'}
"""

from urllib.parse import unquote

from .actions import (CreateDatabase, CreateDocument, ReadDocument, UpdateDocument,
                      DeleteDocument, ExecuteView, ReadAllDocuments)
from .io import get_transport
from .path import DatabaseName, DatabasePath, DocumentId, DesignDocumentName, ViewPath

__all__ = ['Couch', 'Database']


class Couch(object):
    """Represents a CouchDB server."""
    def __init__(self, url=None, auth=None, transport=None):
        """Initialize the server object.

        Args:
            url (str): url of the couchdb server (default: the host and port in
            chill.config.defaults)

            auth (tuple): login information. e.g., ('username', 'password')

        Kwargs:
            transport: an already-built transport to use instead of one made
            by chill.io.get_transport()
        """
        self.transport = transport if transport is not None else get_transport(url, auth)

    def __repr__(self):
        return '<%s %r>' % (type(self).__name__, getattr(self.transport, 'url', None))

    def __getitem__(self, name):
        return self.db(name)

    def db(self, name):
        """A Database object for the named database (no request is made)."""
        return Database(name, couch=self)

    def create_database(self, name):
        """
        Returns:
            CreateDatabase. raises DatabaseExists when run against an
            existing database
        """
        return CreateDatabase(DatabasePath(name), transport=self.transport)

    def close(self):
        self.transport.close()


class Database(object):
    """Represents a single DB on a couch server."""
    def __init__(self, name, couch=None, auth=None):
        """Initialize the database object.

        Args:
            name (str): either a full url to the database, or just a database name
            (on the server given by `couch`, or the one in chill.config.defaults)

            couch (Couch): the server the database lives on

            auth (tuple): optional login information, used only when `couch`
            is omitted
        """
        if couch is None:
            url = None
            if '://' in name:
                url, name = name.rstrip('/').rsplit('/', 1)
                name = unquote(name)
            couch = Couch(url, auth=auth)
        self.couch = couch
        self.name = DatabaseName(name)

    def __repr__(self):
        return '<%s %r>' % (type(self).__name__, str(self.name))

    @property
    def path(self):
        return DatabasePath(self.name)

    @property
    def transport(self):
        return self.couch.transport

    def create(self):
        return CreateDatabase(self.path, transport=self.transport)

    def create_document(self, content, doc_id=None):
        """Store a new document.

        Args:
            content (dict): the document's JSON content

            doc_id (str): the id to use; the server picks one when omitted

        Returns:
            CreateDocument. runs to a (DocumentId, Revision) tuple
        """
        return CreateDocument(self.path, content, doc_id=doc_id, transport=self.transport)

    def create_design(self, name, design):
        """Store a Design (or any view-bearing content) as ``_design/{name}``."""
        return self.create_document(design, doc_id=DocumentId(DesignDocumentName(name)))

    def read_document(self, doc_id, revision=None, attachments=None):
        """
        Returns:
            ReadDocument. runs to a Document
        """
        return ReadDocument(self.path.document_path(doc_id), revision=revision,
                            attachments=attachments, transport=self.transport)

    def update_document(self, doc):
        """
        Returns:
            UpdateDocument. runs to the document's new Revision
        """
        return UpdateDocument(doc, transport=self.transport)

    def delete_document(self, doc_id, revision):
        """
        Returns:
            DeleteDocument. runs to the Revision of the deletion
        """
        return DeleteDocument(self.path.document_path(doc_id), revision,
                              transport=self.transport)

    def execute_view(self, ddoc_name, view_name, **options):
        """Query a view of one of this database's design documents.

        Args:
            ddoc_name (str): the design document's name, without ``_design/``

            view_name (str): the view's name

        Kwargs:
            see ExecuteView

        Returns:
            ExecuteView. runs to a ReducedView or UnreducedView
        """
        return ExecuteView(ViewPath(self.name, ddoc_name, view_name), transport=self.transport,
                           **options)

    def read_all_documents(self, **options):
        """
        Returns:
            ReadAllDocuments. runs to an UnreducedView keyed by document id
        """
        return ReadAllDocuments(self.path, transport=self.transport, **options)
