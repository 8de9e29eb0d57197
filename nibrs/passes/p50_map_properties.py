"""
Pass 50 — Property and Evidence Mapping

Builds Property segments from the extracted property descriptions, or,
when the extract has none, from dollar amounts found in the narrative.
Drug properties get type/quantity/measurement sub-extraction. A drug
offense with no drug property gets one synthesized from the narrative.
Evidence nouns (firearms, weapons, drugs) become the Evidence block.
"""

from typing import Optional

from nibrs.codes.tables import (
    DRUG_PROPERTY_CODE,
    DRUG_PROPERTY_TERMS,
    GENERIC_PROPERTY_CODE,
    SEIZED_LOSS_TYPE,
)
from nibrs.core.context import MappingContext
from nibrs.core.logging import get_pass_logger
from nibrs.ir.schema import MappingResult, Property, PropertyDescription
from nibrs.mapping.classify import map_loss_type, map_property
from nibrs.mapping.extraction import (
    extract_drug_details,
    extract_evidence_details,
    extract_multiple_properties,
    is_drug_text,
)
from nibrs.mapping.text import has_term, split_sentences

PASS_NAME = "p50_map_properties"
log = get_pass_logger(PASS_NAME)

DRUG_OFFENSE_CODES = {"35A", "35C", "35D"}


def map_properties(ctx: MappingContext) -> MappingContext:
    descriptions = list(ctx.extract.properties)
    source = "extract"
    if not descriptions:
        descriptions = extract_multiple_properties(ctx.narrative)
        source = "narrative"

    for desc in descriptions:
        prop = _build_property(ctx, desc, sequence_number=len(ctx.properties) + 1)
        if prop is not None:
            ctx.properties.append(prop)

    if DRUG_OFFENSE_CODES & set(ctx.offense_codes) and not any(
        p.description_code == DRUG_PROPERTY_CODE for p in ctx.properties
    ):
        ctx.properties.append(_synthesize_drug_property(ctx, len(ctx.properties) + 1))

    ctx.evidence = extract_evidence_details(ctx.narrative)

    log.info(
        "properties_mapped",
        source=source,
        count=len(ctx.properties),
        codes=[p.description_code for p in ctx.properties],
        evidence=bool(ctx.evidence),
    )
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="mapped_properties",
        codes=[p.description_code for p in ctx.properties],
        evidence_items=ctx.evidence.items if ctx.evidence else [],
    )
    return ctx


def _build_property(
    ctx: MappingContext,
    desc: PropertyDescription,
    sequence_number: int,
) -> Optional[Property]:
    text = desc.description or ""
    if not text.strip() and desc.value is None:
        return None

    result = map_property(text)
    if result.mapped:
        ctx.property_results.append(result)
    code = result.code or GENERIC_PROPERTY_CODE
    loss_type = map_loss_type(desc.loss_description) or None

    prop = Property(
        sequence_number=sequence_number,
        description_code=code,
        description=text or None,
        loss_type=loss_type,
        value=desc.value if desc.value is not None and desc.value >= 0 else None,
        confidence=result.confidence if result.mapped else 0.0,
        source_text=desc.loss_description or text or None,
    )

    if code == DRUG_PROPERTY_CODE or is_drug_text(text):
        _apply_drug_details(prop, f"{text} {desc.loss_description or ''}")
    return prop


def _apply_drug_details(prop: Property, text: str) -> None:
    drug_type, quantity, measurement = extract_drug_details(text)
    prop.seized = True
    prop.loss_type = SEIZED_LOSS_TYPE
    prop.suspected_drug_type = drug_type
    prop.drug_quantity = quantity
    prop.drug_measurement = measurement


def _synthesize_drug_property(ctx: MappingContext, sequence_number: int) -> Property:
    sentence = next(
        (s for s in split_sentences(ctx.narrative) if has_term(s, DRUG_PROPERTY_TERMS)),
        ctx.offenses[0].description,
    )
    log.verbose("drug_property_synthesized", text=sentence)
    ctx.property_results.append(
        MappingResult(code=DRUG_PROPERTY_CODE, confidence=0.9, original_input=sentence)
    )
    prop = Property(
        sequence_number=sequence_number,
        description_code=DRUG_PROPERTY_CODE,
        description=sentence,
        confidence=0.9,
        source_text=sentence,
    )
    _apply_drug_details(prop, ctx.narrative)
    return prop
