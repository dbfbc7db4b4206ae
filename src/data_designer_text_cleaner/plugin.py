from data_designer.plugins.plugin import Plugin, PluginType

text_cleaner_plugin = Plugin(
    config_qualified_name="data_designer_text_cleaner.config.TextCleanerColumnConfig",
    impl_qualified_name="data_designer_text_cleaner.generator.TextCleanerColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
