# File: tests/revit/test_revit_collaborators.py
"""Tests for the Revit adapters using stand-in API objects."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from wall_opening_generator.core.errors import (
    DocumentNotFoundError,
    HostQueryError,
    OpeningCreationError,
    SetupError,
    UnresolvedHost,
)
from wall_opening_generator.core.opening_types import DuctShape, ElementKey, PlacementRequest
from wall_opening_generator.revit import document_lookup, revit_collaborators
from wall_opening_generator.revit.document_lookup import (
    duct_to_record,
    element_id_value,
    find_secondary_document,
)
from wall_opening_generator.revit.revit_collaborators import (
    ReferenceIntersectorRayCaster,
    RevitLevelResolver,
    RevitOpeningCreator,
    activate_family_symbol,
    reference_to_key,
    revit_transaction,
)


def _id(value):
    return SimpleNamespace(Value=value)


def _xyz(x, y, z):
    return SimpleNamespace(X=x, Y=y, Z=z)


@pytest.fixture
def fake_api(monkeypatch):
    """Replace Revit API constructors with plain stand-ins."""
    monkeypatch.setattr(revit_collaborators, "ElementId", lambda value: value)
    monkeypatch.setattr(revit_collaborators, "XYZ", lambda *coords: coords)
    monkeypatch.setattr(
        revit_collaborators, "StructuralType", SimpleNamespace(NonStructural="NonStructural")
    )


class TestElementIds:
    """Test ElementId and Reference mapping."""

    def test_value_attribute(self):
        assert element_id_value(_id(42)) == 42

    def test_integer_value_attribute(self):
        assert element_id_value(SimpleNamespace(IntegerValue=7)) == 7

    def test_plain_int(self):
        assert element_id_value(3) == 3

    def test_host_reference(self):
        reference = SimpleNamespace(ElementId=_id(10), LinkedElementId=_id(-1))
        assert reference_to_key(reference) == ElementKey(10)

    def test_linked_reference(self):
        """Link instance id becomes the container."""
        reference = SimpleNamespace(ElementId=_id(900), LinkedElementId=_id(10))
        assert reference_to_key(reference) == ElementKey(10, container=900)


class TestDocumentLookup:
    """Test setup lookups."""

    def test_find_secondary_document(self):
        arch = SimpleNamespace(Title="Проект_АР")
        mech = SimpleNamespace(Title="Проект_ОВ")
        application = SimpleNamespace(Documents=[arch, mech])

        assert find_secondary_document(application, "ОВ") is mech

    def test_missing_secondary_document(self):
        application = SimpleNamespace(Documents=[SimpleNamespace(Title="Проект_АР")])

        with pytest.raises(DocumentNotFoundError):
            find_secondary_document(application, "ОВ")

    def test_lookups_require_revit(self, monkeypatch):
        monkeypatch.setattr(document_lookup, "REVIT_AVAILABLE", False)

        with pytest.raises(SetupError):
            document_lookup.find_3d_view(MagicMock())
        with pytest.raises(SetupError):
            document_lookup.collect_ducts(MagicMock())


class TestDuctToRecord:
    """Test Duct -> DuctRecord conversion."""

    def _duct(self, shape, **section):
        curve = MagicMock()
        curve.GetEndPoint.side_effect = [_xyz(0.0, 0.0, 1.0), _xyz(10.0, 0.0, 1.0)]
        return SimpleNamespace(
            Id=_id(55),
            Location=SimpleNamespace(Curve=curve),
            DuctType=SimpleNamespace(Shape=shape),
            **section,
        )

    def test_round_duct(self):
        record = duct_to_record(self._duct("Round", Diameter=0.3))

        assert record.id == 55
        assert record.start == (0.0, 0.0, 1.0)
        assert record.end == (10.0, 0.0, 1.0)
        assert record.diameter == 0.3
        assert record.shape == DuctShape.ROUND

    def test_rectangular_duct(self):
        record = duct_to_record(self._duct("Rectangular", Width=0.5, Height=0.25))

        assert record.shape == DuctShape.RECTANGULAR
        assert record.diameter is None
        assert (record.width, record.height) == (0.5, 0.25)

    def test_duct_without_curve(self):
        duct = SimpleNamespace(Id=_id(1), Location=SimpleNamespace(Point=_xyz(0, 0, 0)))
        assert duct_to_record(duct) is None


class TestReferenceIntersectorRayCaster:
    """Test conversion of intersector results."""

    def _context(self, element_id, proximity, linked=-1, point=None):
        reference = SimpleNamespace(
            ElementId=_id(element_id),
            LinkedElementId=_id(linked),
            GlobalPoint=point,
        )
        return SimpleNamespace(Proximity=proximity, GetReference=lambda: reference)

    def test_cast(self, fake_api):
        intersector = MagicMock()
        intersector.Find.return_value = [
            self._context(10, 2.0, point=_xyz(2.0, 0.0, 0.0)),
            self._context(10, 2.2),
        ]
        caster = ReferenceIntersectorRayCaster(None, intersector=intersector)

        hits = caster.cast((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), 10.0)

        intersector.Find.assert_called_once_with((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
        assert [h.key for h in hits] == [ElementKey(10), ElementKey(10)]
        assert hits[0].point == (2.0, 0.0, 0.0)
        assert hits[1].point == pytest.approx((2.2, 0.0, 0.0))

    def test_filter_applied(self, fake_api):
        intersector = MagicMock()
        intersector.Find.return_value = [self._context(10, 2.0), self._context(11, 3.0)]
        caster = ReferenceIntersectorRayCaster(None, intersector=intersector)

        hits = caster.cast((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), 10.0, lambda key: key.local == 11)

        assert [h.key for h in hits] == [ElementKey(11)]

    def test_find_failure_raises_host_query_error(self, fake_api):
        intersector = MagicMock()
        intersector.Find.side_effect = RuntimeError("Revit API exception")
        caster = ReferenceIntersectorRayCaster(None, intersector=intersector)

        with pytest.raises(HostQueryError, match="Revit API exception") as exc_info:
            caster.cast((0.0, 1.0, 0.0), (1.0, 0.0, 0.0), 10.0)

        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestRevitLevelResolver:
    """Test level lookup through Wall.LevelId."""

    def _doc(self, wall, level):
        def get_element(element_id):
            if element_id == 10:
                return wall
            if wall is not None and element_id is wall.LevelId:
                return level
            return None
        doc = MagicMock()
        doc.GetElement.side_effect = get_element
        return doc

    def test_level_of(self, fake_api):
        wall = SimpleNamespace(LevelId=_id(30))
        resolver = RevitLevelResolver(self._doc(wall, SimpleNamespace(Name="Level 1")))

        assert resolver.level_of(ElementKey(10)) == 30

    def test_missing_wall(self, fake_api):
        resolver = RevitLevelResolver(self._doc(None, None))

        with pytest.raises(UnresolvedHost):
            resolver.level_of(ElementKey(10))

    def test_invalid_level_id(self, fake_api):
        wall = SimpleNamespace(LevelId=_id(-1))
        resolver = RevitLevelResolver(self._doc(wall, None))

        with pytest.raises(UnresolvedHost):
            resolver.level_of(ElementKey(10))

    def test_linked_wall_without_document(self, fake_api):
        resolver = RevitLevelResolver(MagicMock())

        with pytest.raises(UnresolvedHost):
            resolver.level_of(ElementKey(10, container=900))


class TestRevitOpeningCreator:
    """Test NewFamilyInstance placement and sizing."""

    @pytest.fixture
    def request_w1(self):
        return PlacementRequest((4.0, 0.0, 1.0), ElementKey(10), 30, 0.3, 0.3)

    @pytest.fixture
    def doc(self):
        doc = MagicMock()
        instance = MagicMock()
        instance.LookupParameter.return_value = MagicMock(IsReadOnly=False)
        doc.Create.NewFamilyInstance.return_value = instance
        return doc

    def test_places_and_sizes(self, fake_api, doc, request_w1):
        creator = RevitOpeningCreator(doc, "Ширина", "Высота")
        symbol = object()

        instance = creator.create_opening(request_w1, symbol)

        args = doc.Create.NewFamilyInstance.call_args.args
        assert args[0] == (4.0, 0.0, 1.0)
        assert args[1] is symbol
        assert args[4] == "NonStructural"
        instance.LookupParameter.assert_any_call("Ширина")
        instance.LookupParameter.assert_any_call("Высота")
        assert instance.LookupParameter.return_value.Set.call_count == 2

    def test_missing_family_rejected(self, fake_api, doc, request_w1):
        with pytest.raises(OpeningCreationError):
            RevitOpeningCreator(doc, "W", "H").create_opening(request_w1, None)

    def test_linked_host_rejected(self, fake_api, doc):
        request = PlacementRequest((4.0, 0.0, 1.0), ElementKey(10, container=900), 30, 0.3, 0.3)

        with pytest.raises(OpeningCreationError, match="linked model"):
            RevitOpeningCreator(doc, "W", "H").create_opening(request, object())
        doc.Create.NewFamilyInstance.assert_not_called()

    def test_host_failure_wrapped(self, fake_api, doc, request_w1):
        doc.Create.NewFamilyInstance.side_effect = RuntimeError("no face")

        with pytest.raises(OpeningCreationError, match="no face"):
            RevitOpeningCreator(doc, "W", "H").create_opening(request_w1, object())

    def test_missing_parameter_deletes_instance(self, fake_api, doc, request_w1):
        instance = doc.Create.NewFamilyInstance.return_value
        instance.LookupParameter.return_value = None

        with pytest.raises(OpeningCreationError, match="missing or read-only"):
            RevitOpeningCreator(doc, "W", "H").create_opening(request_w1, object())
        doc.Delete.assert_called_once_with(instance.Id)


class TestTransactions:
    """Test transaction bookkeeping."""

    @pytest.fixture
    def transaction_cls(self, monkeypatch):
        transaction_cls = MagicMock()
        transaction_cls.return_value.HasStarted.return_value = True
        monkeypatch.setattr(revit_collaborators, "Transaction", transaction_cls)
        return transaction_cls

    def test_commit_on_success(self, transaction_cls):
        doc = MagicMock()

        with revit_transaction(doc, "Place"):
            pass

        transaction_cls.assert_called_once_with(doc, "Place")
        transaction_cls.return_value.Commit.assert_called_once()
        transaction_cls.return_value.RollBack.assert_not_called()

    def test_rollback_on_error(self, transaction_cls):
        with pytest.raises(ValueError):
            with revit_transaction(MagicMock(), "Place"):
                raise ValueError("boom")

        transaction_cls.return_value.RollBack.assert_called_once()
        transaction_cls.return_value.Commit.assert_not_called()

    def test_activate_inactive_symbol(self, transaction_cls):
        doc = MagicMock()
        symbol = MagicMock(IsActive=False)

        assert activate_family_symbol(doc, symbol, "Activate") is symbol
        symbol.Activate.assert_called_once()
        doc.Regenerate.assert_called_once()

    def test_active_symbol_untouched(self, transaction_cls):
        symbol = MagicMock(IsActive=True)

        activate_family_symbol(MagicMock(), symbol, "Activate")

        symbol.Activate.assert_not_called()
        transaction_cls.assert_not_called()
