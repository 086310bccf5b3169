"""
Media library models: package -> category -> file.
"""

from .database import db


class MediaPackage(db.Model):
    """Top-level media package (e.g. "Looks", "Sounds")."""

    __tablename__ = 'media_package'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, unique=True)
    name_url = db.Column(db.String(255), nullable=False, unique=True)

    categories = db.relationship(
        'MediaPackageCategory',
        back_populates='package',
        cascade='all, delete-orphan',
        order_by='MediaPackageCategory.priority.desc(), MediaPackageCategory.id',
    )

    def __str__(self):
        return self.name


class MediaPackageCategory(db.Model):
    """Category inside a media package."""

    __tablename__ = 'media_package_category'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    package_id = db.Column(
        db.Integer,
        db.ForeignKey('media_package.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    priority = db.Column(db.Integer, nullable=False, default=0)

    package = db.relationship('MediaPackage', back_populates='categories')
    files = db.relationship(
        'MediaPackageFile',
        back_populates='category',
        cascade='all, delete-orphan',
        order_by='MediaPackageFile.id',
    )

    def __str__(self):
        return self.name

    def to_dict(self):
        """Serialize category for the category listing."""
        return {
            'id': self.id,
            'name': self.name,
            'displayID': self.name.replace(' ', ''),
        }


class MediaPackageFile(db.Model):
    """Single downloadable media asset."""

    __tablename__ = 'media_package_file'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    extension = db.Column(db.String(20), nullable=False)
    url = db.Column(db.String(500), nullable=True)
    category_id = db.Column(
        db.Integer,
        db.ForeignKey('media_package_category.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    active = db.Column(db.Boolean, nullable=False, default=True)
    flavor = db.Column(db.String(255), nullable=False, default='pocketcode')
    author = db.Column(db.String(255), nullable=True)
    downloads = db.Column(db.Integer, nullable=False, default=0)

    category = db.relationship('MediaPackageCategory', back_populates='files')

    @property
    def file_name(self):
        """Name of the asset on disk inside the media package directory."""
        return f'{self.id}.{self.extension}'

    def to_dict(self, download_url=None):
        """Serialize file as a flat media record."""
        return {
            'id': self.id,
            'name': self.name,
            'flavor': self.flavor,
            'package': self.category.package.name if self.category and self.category.package else None,
            'category': self.category.name if self.category else None,
            'author': self.author,
            'extension': self.extension,
            'url': self.url,
            'download_url': download_url,
        }
