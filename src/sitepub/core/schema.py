"""Content graph schema: type definitions for Drupal and WordPress content"""

import re


TYPE_DEFS = '''
union relatedParagraphUnion =
    paragraph__program_variants
  | paragraph__general_text

union relatedTaxonomyUnion =
    taxonomy_term__tags
  | taxonomy_term__specializations
  | taxonomy_term__programs
  | taxonomy_term__degrees
  | taxonomy_term__topics
  | taxonomy_term__units

union relatedPagesUnion =
    node__page
  | node__landing_page

interface TaxonomyInterface @nodeInterface {
  id: ID!
  drupal_id: String
  name: String
}

type BodyField {
  processed: String
  value: String
  format: String
  summary: String
}
type BodyFieldWithSummary {
  processed: String
  value: String
  format: String
  summary: String
}
type FieldLink {
  title: String
  uri: String
}
type FieldsPathAlias {
  alias: PathAlias @link
  content: String
}
type ImageField implements Node {
  alt: String
}
type TaxonomyDescription {
  processed: String
  value: String
  format: String
}

type PathAlias implements Node {
  key: String
  value: String
}

type media__image implements Node {
  drupal_id: String
  name: String
  field_media_image: ImageField
  fields: media__imageFields
  relationships: media__imageRelationships
}
type media__imageFields implements Node {
  tags: [String]
}
type media__imageRelationships implements Node {
  field_media_image: file__file @link(from: "field_media_image___NODE")
  field_tags: [relatedTaxonomyUnion] @link(from: "field_tags___NODE")
}

type node__article implements Node {
  changed: Date @dateformat
  created: Date @dateformat
  drupal_id: String
  drupal_internal__nid: Int
  title: String
  body: BodyFieldWithSummary
  field_image: ImageField
  relationships: node__articleRelationships
  fields: node__articleFields
}
type node__articleRelationships implements Node {
  field_image: file__file @link(from: "field_image___NODE")
  field_news_category: [taxonomy_term__news_category] @link(from: "field_news_category___NODE")
  field_tags: [relatedTaxonomyUnion] @link(from: "field_tags___NODE")
}
type node__articleFields implements Node {
  alias: PathAlias @link
  content: String
  tags: [String]
}

type node__call_to_action implements Node {
  drupal_id: String
  drupal_internal__nid: Int
  title: String
  field_call_to_action_link: FieldLink
  relationships: node__call_to_actionRelationships
  fields: node__call_to_actionFields
}
type node__call_to_actionFields implements Node {
  tags: [String]
}
type node__call_to_actionRelationships implements Node {
  field_call_to_action_goal: taxonomy_term__goals @link(from: "field_call_to_action_goal___NODE")
  field_tags: [relatedTaxonomyUnion] @link(from: "field_tags___NODE")
}

type node__career implements Node {
  drupal_id: String
  drupal_internal__nid: Int
  title: String
  changed: Date @dateformat
  body: BodyFieldWithSummary
  relationships: node__careerRelationships
  fields: node__careerFields
}
type node__careerFields implements Node {
  tags: [String]
}
type node__careerRelationships implements Node {
  field_tags: [relatedTaxonomyUnion] @link(from: "field_tags___NODE")
}

type node__course implements Node {
  drupal_id: String
  drupal_internal__nid: Int
  title: String
  field_code: String
  field_course_url: node__courseField_course_url
  field_credits: String
  field_level: Int
  relationships: node__courseRelationships
  fields: node__courseFields
}
type node__courseFields implements Node {
  tags: [String]
}
type node__courseField_course_url implements Node {
  uri: String
}
type node__courseRelationships implements Node {
  field_tags: [relatedTaxonomyUnion] @link(from: "field_tags___NODE")
}

type node__employer implements Node {
  drupal_id: String
  drupal_internal__nid: Int
  title: String
  field_employer_summary: BodyField
  field_image: ImageField
  field_link: FieldLink
  relationships: node__employerRelationships
  fields: node__employerFields
}
type node__employerFields implements Node {
  tags: [String]
}
type node__employerRelationships {
  field_image: file__file @link(from: "field_image___NODE")
  field_tags: [relatedTaxonomyUnion] @link(from: "field_tags___NODE")
}

type node__landing_page implements Node {
  drupal_id: String
  drupal_internal__nid: Int
  title: String
  body: BodyFieldWithSummary
  relationships: node__landing_pageRelationships
  fields: FieldsPathAlias
}
type node__landing_pageRelationships implements Node {
  field_events_widget: paragraph__events_widget @link(from: "field_events_widget___NODE")
  field_related_pages: [paragraph__related_pages] @link(from: "field_related_pages___NODE")
  field_tags: [relatedTaxonomyUnion] @link(from: "field_tags___NODE")
}

type node__page implements Node {
  drupal_id: String
  drupal_internal__nid: Int
  title: String
  body: BodyFieldWithSummary
  field_image: ImageField
  relationships: node__pageRelationships
  fields: FieldsPathAlias
}
type node__pageRelationships implements Node {
  field_events_widget: paragraph__events_widget @link(from: "field_events_widget___NODE")
  field_image: file__file @link(from: "field_image___NODE")
  field_related_pages: [paragraph__related_pages] @link(from: "field_related_pages___NODE")
  field_tags: [relatedTaxonomyUnion] @link(from: "field_tags___NODE")
}

type node__program implements Node {
  drupal_id: String
  drupal_internal__nid: Int
  title: String
  changed: Date @dateformat
  field_course_notes: node__programField_course_notes
  field_program_overview: node__programField_program_overview
  relationships: node__programRelationships
  fields: FieldsPathAlias
}
type node__programField_course_notes implements Node {
  value: String
  format: String
  processed: String
}
type node__programField_program_overview implements Node {
  value: String
  format: String
  processed: String
}
type node__programRelationships implements Node {
  field_program_acronym: taxonomy_term__programs @link(from: "field_program_acronym___NODE")
  field_courses: [node__course] @link(from: "field_courses___NODE")
  field_degrees: [taxonomy_term__degrees] @link(from: "field_degrees___NODE")
  field_program_statistics: [paragraph__program_statistic] @link(from: "field_program_statistics___NODE")
  field_program_variants: [relatedParagraphUnion] @link(from: "field_program_variants___NODE")
  field_specializations: [taxonomy_term__specializations] @link(from: "field_specializations___NODE")
  field_tags: [taxonomy_term__tags] @link(from: "field_tags___NODE")
}

type node__testimonial implements Node {
  drupal_id: String
  drupal_internal__nid: Int
  title: String
  body: BodyFieldWithSummary
  field_testimonial_person_desc: String
  field_image: ImageField
  relationships: node__testimonialRelationships
  fields: node__testimonialFields
}
type node__testimonialFields implements Node {
  tags: [String]
}
type node__testimonialRelationships {
  field_image: file__file @link(from: "field_image___NODE")
  field_tags: [relatedTaxonomyUnion] @link(from: "field_tags___NODE")
}

type paragraph__events_widget implements Node {
  drupal_id: String
  field_title: String
  field_match_categories: Boolean
  relationships: paragraph__events_widgetRelationships
}
type paragraph__events_widgetRelationships {
  field_event_category: [taxonomy_term__event_category] @link(from: "field_event_category___NODE")
}
type paragraph__general_text implements Node {
  drupal_id: String
  field_general_text: BodyField
}
type paragraph__program_statistic implements Node {
  drupal_id: String
  field_stat_range: Boolean
  field_stat_value: String
  field_stat_value_end: String
  relationships: paragraph__program_statisticRelationships
}
type paragraph__program_statisticRelationships implements Node {
  field_stat_icon: media__image @link(from: "field_stat_icon___NODE")
  field_stat_type: taxonomy_term__statistic_type @link(from: "field_stat_type___NODE")
}
type paragraph__program_variants implements Node {
  drupal_id: String
  field_variant_title: String
  field_variant_link: FieldLink
  field_variant_info: BodyField
  relationships: paragraph__program_variantsRelationships
}
type paragraph__program_variantsRelationships {
  field_variant_type: taxonomy_term__program_variant_type @link(from: "field_variant_type___NODE")
}
type paragraph__related_pages implements Node {
  drupal_id: String
  relationships: paragraph__related_pagesRelationships
}
type paragraph__related_pagesRelationships {
  field_related_pages: [relatedPagesUnion] @link(from: "field_related_pages___NODE")
}

type taxonomy_term__degrees implements Node & TaxonomyInterface {
  drupal_id: String
  drupal_internal__tid: Int
  field_degree_acronym: String
  name: String
  description: TaxonomyDescription
}
type taxonomy_term__event_category implements Node & TaxonomyInterface {
  drupal_id: String
  drupal_internal__tid: Int
  name: String
}
type taxonomy_term__goals implements Node & TaxonomyInterface {
  drupal_id: String
  drupal_internal__tid: Int
  name: String
  field_goal_action: String
}
type taxonomy_term__news_category implements Node & TaxonomyInterface {
  drupal_id: String
  drupal_internal__tid: Int
  name: String
  description: TaxonomyDescription
}
type taxonomy_term__program_variant_type implements Node {
  name: String
}
type taxonomy_term__programs implements Node & TaxonomyInterface {
  drupal_id: String
  drupal_internal__tid: Int
  name: String
}
type taxonomy_term__specializations implements Node & TaxonomyInterface {
  drupal_id: String
  drupal_internal__tid: Int
  field_specialization_acronym: String
  name: String
  description: TaxonomyDescription
}
type taxonomy_term__statistic_type implements Node & TaxonomyInterface {
  drupal_id: String
  drupal_internal__tid: Int
  name: String
}
type taxonomy_term__tags implements Node & TaxonomyInterface {
  drupal_id: String
  drupal_internal__tid: Int
  name: String
  description: TaxonomyDescription
}
type taxonomy_term__topics implements Node & TaxonomyInterface {
  drupal_id: String
  drupal_internal__tid: Int
  fields: FieldsPathAlias
  name: String
  description: TaxonomyDescription
}
type taxonomy_term__units implements Node & TaxonomyInterface {
  drupal_id: String
  drupal_internal__tid: Int
  field_unit_acronym: String
  name: String
  description: TaxonomyDescription
}

type file__file implements Node {
  drupal_id: String
  filename: String
  uri: String
}

type menu_items implements Node {
  drupal_id: String
  menu_name: String
  title: String
  url: String
  weight: Int
  parent: menu_items @link
  route: MenuItemRoute
}
type MenuItemRoute {
  parameters: MenuItemRouteParameters
}
type MenuItemRouteParameters {
  node: String
}

type wp_event implements Node {
  title: String
  url: String
  startDate: Date @dateformat
  endDate: Date @dateformat
  isPast: Boolean
  eventsCategories: [String]
}
'''

NODE_TYPE_RE = re.compile(r'^\s*type\s+(\w+)\s+implements\s+Node\b', re.MULTILINE)


class SchemaError(ValueError):
    """Raised for nodes whose type is not declared in the schema."""


def type_defs() -> str:
    """Return the SDL block handed to schema customization."""
    return TYPE_DEFS.strip() + "\n"


def node_types(sdl: str = TYPE_DEFS) -> set[str]:
    """Types that implement Node, i.e. the ones that may be stored as graph nodes."""
    return set(NODE_TYPE_RE.findall(sdl))
